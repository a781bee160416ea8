# Tests for listing presentation helpers.
# Created: 2026-10-12

from datetime import datetime

import pytest

from xfilemanager.browser.formatting import (
    FILE_ICONS,
    ICON_CLASSES,
    entry_link,
    file_icon,
    file_url,
    format_date,
    format_file_size,
    icon_class,
    listing_url,
)
from xfilemanager.browser.models import DirectoryEntry, ViewMode


def _entry(name, is_dir=False, is_index=False, relative=None):
    ext = name.rpartition(".")[2].lower() if "." in name else ""
    return DirectoryEntry(
        name=name,
        relative_path=relative or name,
        is_dir=is_dir,
        size_bytes=0,
        modified_at=datetime(2026, 1, 2, 15, 4),
        extension=ext,
        is_index=is_index,
    )


class TestFormatFileSize:
    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (1, "1 B"),
            (1023, "1023 B"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (1048576, "1 MB"),
            (1572864, "1.5 MB"),
            (1073741824, "1 GB"),
            (1099511627776, "1 TB"),
            (1234567, "1.18 MB"),
        ],
    )
    def test_sizes(self, size, expected):
        assert format_file_size(size) == expected

    def test_beyond_terabytes_stays_in_tb(self):
        assert format_file_size(2048 * 1024**4) == "2048 TB"


class TestFileIcon:
    def test_directory(self):
        assert file_icon(_entry("photos", is_dir=True)) == "folder"

    def test_index_file(self):
        assert file_icon(_entry("index.html", is_index=True)) == "home"

    @pytest.mark.parametrize(
        "name, icon",
        [
            ("a.png", "image"),
            ("a.PDF", "pdf"),
            ("a.docx", "word"),
            ("a.xlsx", "excel"),
            ("a.pptx", "powerpoint"),
            ("a.md", "text"),
            ("a.htm", "html"),
            ("a.css", "css"),
            ("a.json", "javascript"),
            ("a.php", "php"),
            ("a.xml", "xml"),
            ("a.7z", "archive"),
            ("a.ogg", "audio"),
            ("a.MKV", "video"),
            ("a.dll", "application"),
            ("a.py", "script"),
            ("a.sqlite", "file"),
            ("a.db", "database"),
            ("Makefile", "file"),
        ],
    )
    def test_extension_lookup(self, name, icon):
        assert file_icon(_entry(name)) == icon

    def test_every_category_has_icon_class(self):
        for category in set(FILE_ICONS.values()) | {"folder", "home", "file"}:
            assert category in ICON_CLASSES

    def test_unknown_icon_class_falls_back(self):
        assert icon_class("nope") == ICON_CLASSES["file"]


class TestLinks:
    def test_directory_links_to_listing(self):
        link = entry_link(_entry("b", is_dir=True, relative="a/b"), ViewMode.LIST)
        assert link.href == "?path=a%2Fb&view=list"
        assert link.download is False

    def test_directory_link_without_view(self):
        assert entry_link(_entry("b", is_dir=True, relative="a/b")).href == "?path=a%2Fb"

    def test_index_file_opens_in_place(self):
        link = entry_link(_entry("index.html", is_index=True, relative="site/index.html"))
        assert link.href == "/files/site/index.html"
        assert link.download is False

    def test_regular_file_downloads(self):
        link = entry_link(_entry("My Report.pdf", relative="docs/My Report.pdf"))
        assert link.href == "/files/docs/My%20Report.pdf"
        assert link.download is True

    def test_file_url_quotes_special_characters(self):
        assert file_url("a/#1?.txt") == "/files/a/%231%3F.txt"

    def test_listing_url_root(self):
        assert listing_url("", ViewMode.GRID) == "?path=&view=grid"


class TestViewMode:
    @pytest.mark.parametrize(
        "raw, expected",
        [(None, ViewMode.GRID), ("", ViewMode.GRID), ("list", ViewMode.LIST),
         ("LIST", ViewMode.LIST), ("grid", ViewMode.GRID), ("tiles", ViewMode.GRID)],
    )
    def test_parse(self, raw, expected):
        assert ViewMode.parse(raw) is expected

    def test_parse_with_default(self):
        assert ViewMode.parse(None, ViewMode.LIST) is ViewMode.LIST
        assert ViewMode.parse("bogus", ViewMode.LIST) is ViewMode.LIST


class TestFormatDate:
    def test_default_pattern(self):
        value = datetime(2026, 1, 2, 15, 4)
        assert format_date(value, "%b %d, %Y %I:%M %p") == "Jan 02, 2026 03:04 PM"
