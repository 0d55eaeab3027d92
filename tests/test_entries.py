import pytest

from seb.entries import Entry, EntryKind, Field, Resolver
from seb.exceptions import UnresolvedEntryError
from seb.quoted import QuotedString


def test_kinds_expose_keyword_and_required_fields():
    assert EntryKind.MANUAL.keyword == "manual"
    assert EntryKind.MANUAL.required_fields == ("title",)
    assert EntryKind.ARTICLE.required_fields == ("author", "title", "journal", "year")
    assert EntryKind.OTHER.required_fields == ()
    # both inbook flavours are distinct kinds
    assert EntryKind.BOOK_CHAPTER is not EntryKind.BOOK_PAGES
    assert len(EntryKind) == 14


def test_resolver_with_cite_starts_empty():
    resolver = EntryKind.BOOK.resolver("key")
    assert isinstance(resolver, Resolver)
    assert resolver.kind is EntryKind.BOOK
    assert resolver.cite == "key"
    assert resolver.fields() == []
    assert resolver.missing_fields() == ["author", "title", "publisher", "year"]


def test_set_field_fills_required_and_optional_slots():
    resolver = EntryKind.MANUAL.resolver("m")
    resolver.set_field("title", "First")
    resolver.set_field("title", QuotedString("Second"))
    resolver.set_field("note", "n")
    assert resolver.get_field("title") == QuotedString("Second")
    assert resolver.optional == {"note": QuotedString("n")}
    assert resolver.is_complete()


def test_book_title_setter_uses_internal_name():
    resolver = EntryKind.IN_PROCEEDINGS.resolver("p")
    resolver.book_title("Proc")
    assert resolver.get_field("book_title") == QuotedString("Proc")
    assert "book_title" not in resolver.missing_fields()


def test_finalize_incomplete_resolver_raises():
    resolver = EntryKind.ARTICLE.resolver("a")
    for name in ("author", "title", "year"):
        resolver.set_field(name, "x")
    with pytest.raises(UnresolvedEntryError) as excinfo:
        resolver.finalize()
    assert excinfo.value.cite == "a"
    assert excinfo.value.missing == ["journal"]


def test_fields_order_required_then_optional():
    resolver = EntryKind.ARTICLE.resolver("a")
    resolver.set_field("doi", "10.1/x")
    resolver.set_field("year", "2020")
    resolver.set_field("title", "T")
    resolver.set_field("url", "u")
    resolver.set_field("journal", "J")
    resolver.set_field("author", "A")
    entry = resolver.finalize()
    names = [f.name for f in entry.fields()]
    assert names == ["author", "title", "journal", "year", "doi", "url"]
    assert all(isinstance(f, Field) for f in entry.fields())


def test_get_field_and_set_cite(manual_entry):
    assert manual_entry.get_field("title") == QuotedString("Test")
    assert manual_entry.get_field("author") == QuotedString("Me")
    assert manual_entry.get_field("missing") is None
    manual_entry.set_cite("renamed")
    assert manual_entry.cite == "renamed"


def test_entry_constructor_validates_required_fields():
    with pytest.raises(UnresolvedEntryError):
        Entry(EntryKind.BOOKLET, "b", required={})
    # stray names passed as required end up optional
    entry = Entry(EntryKind.BOOKLET, "b", required={"title": "T", "howpublished": "web"})
    assert entry.required == {"title": QuotedString("T")}
    assert entry.optional == {"howpublished": QuotedString("web")}


def test_create_builds_complete_entry():
    entry = Entry.create(EntryKind.PROCEEDINGS, "conf", year="2001", title="Conf", editor="Ed")
    assert [f.name for f in entry] == ["title", "year", "editor"]
    with pytest.raises(UnresolvedEntryError):
        Entry.create(EntryKind.PROCEEDINGS, "conf", title="Conf")
