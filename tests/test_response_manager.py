import re
from datetime import datetime

import pytest

from fenris_client.response_manager import (
    DirectoryListing,
    FileInfo,
    Response,
    ResponseManager,
    ResponseType,
    format_file_size,
    format_permissions,
    format_timestamp,
)


@pytest.fixture
def manager():
    return ResponseManager()


def test_status_line_reflects_success(manager):
    ok = manager.handle_response(Response(ResponseType.SUCCESS, True))
    bad = manager.handle_response(Response(ResponseType.ERROR, False))
    assert ok[0] == "Success"
    assert bad[0] == "Error"


def test_pong_with_message(manager):
    lines = manager.handle_response(Response(ResponseType.PONG, True, b"PONG"))
    assert lines == ["Success", "Server is alive", "Message: PONG"]


def test_pong_without_message(manager):
    lines = manager.handle_response(Response(ResponseType.PONG, True))
    assert lines == ["Success", "Server is alive"]


def test_success_without_data(manager):
    lines = manager.handle_response(Response(ResponseType.SUCCESS, True))
    assert lines == ["Success", "Operation completed successfully"]


def test_success_with_data(manager):
    lines = manager.handle_response(Response(ResponseType.SUCCESS, True, b"File written: /a"))
    assert lines[1:] == ["File written: /a"]


def test_error_prefers_error_message(manager):
    response = Response(ResponseType.ERROR, False, b"in data", error_message="in field")
    assert manager.handle_response(response)[1:] == ["Error: in field"]


def test_error_falls_back_to_data(manager):
    response = Response(ResponseType.ERROR, False, b"File not found: /x")
    assert manager.handle_response(response)[1:] == ["Error: File not found: /x"]


def test_error_without_message(manager):
    response = Response(ResponseType.ERROR, False)
    assert manager.handle_response(response)[1:] == ["Unknown error occurred"]


def test_terminated_with_reason(manager):
    response = Response(ResponseType.TERMINATED, True, b"shutdown")
    assert manager.handle_response(response)[1:] == [
        "Server connection terminated",
        "Reason: shutdown",
    ]


def test_unknown_type(manager):
    lines = manager.handle_response(Response(99, True))
    assert lines == ["Success", "Unknown response type"]


def test_empty_file_content(manager):
    lines = manager.handle_response(Response(ResponseType.FILE_CONTENT, True))
    assert lines[1:] == ["(Empty file)"]


def test_text_file_content_split_into_lines(manager):
    response = Response(ResponseType.FILE_CONTENT, True, b"one\n\ntwo\n")
    assert manager.handle_response(response)[1:] == ["one", "", "two"]


def test_text_without_trailing_newline(manager):
    response = Response(ResponseType.FILE_CONTENT, True, b"alpha\nbeta")
    assert manager.handle_response(response)[1:] == ["alpha", "beta"]


def test_binary_file_content(manager):
    data = b"\x00\x01\x02abc"
    lines = manager.handle_response(Response(ResponseType.FILE_CONTENT, True, data))
    assert lines[1:] == [f"(Binary data, {format_file_size(len(data))})"]


def test_file_info_missing(manager):
    lines = manager.handle_response(Response(ResponseType.FILE_INFO, True))
    assert lines[1:] == ["Error: File info missing in response"]


def test_file_info_lines(manager):
    info = FileInfo("/file1.txt", size=22, modified_time=163, permissions=0o644)
    lines = manager.handle_response(Response(ResponseType.FILE_INFO, True, file_info=info))
    assert lines[1] == "File: /file1.txt"
    assert lines[2] == "Size: " + format_file_size(22)
    assert lines[3] == "Modified: " + format_timestamp(163)
    assert lines[4] == "Type: File"
    assert lines[5] == "Permissions: " + format_permissions(0o644)


def test_file_info_without_permissions_omits_line(manager):
    info = FileInfo("/d", is_directory=True)
    lines = manager.handle_response(Response(ResponseType.FILE_INFO, True, file_info=info))
    assert len(lines) == 5
    assert lines[4] == "Type: Directory"


def test_directory_listing_fallback_to_data(manager):
    response = Response(ResponseType.DIR_LISTING, True, b"Directory contents:\nF: a\n")
    assert manager.handle_response(response)[1:] == ["Directory contents:\nF: a\n"]


def test_directory_listing_missing_everything(manager):
    lines = manager.handle_response(Response(ResponseType.DIR_LISTING, True))
    assert lines[1:] == ["Error: Directory listing missing in response"]


def test_empty_directory_listing(manager):
    response = Response(ResponseType.DIR_LISTING, True, directory_listing=DirectoryListing())
    assert manager.handle_response(response)[1:] == ["(Empty directory)"]


def test_directory_listing_table(manager):
    entries = [
        FileInfo("short", size=10, modified_time=0),
        FileInfo("a_much_longer_name", size=4096, modified_time=0, is_directory=True),
    ]
    response = Response(
        ResponseType.DIR_LISTING, True, directory_listing=DirectoryListing(entries)
    )
    lines = manager.handle_response(response)[1:]
    header, separator, *rows = lines
    assert header.startswith("Name")
    assert header.endswith("Type")
    assert separator == "-" * len(header)
    assert len(rows) == 2
    assert rows[0].startswith("short")
    assert rows[0].endswith("File")
    assert rows[1].endswith("Directory")
    # Columns line up with the header.
    assert rows[0].index(format_file_size(10)) == header.index("Size")
    assert rows[1].index(format_file_size(4096)) == header.index("Size")


def test_format_file_size_bytes():
    assert format_file_size(512) == "512 B"


def test_format_file_size_kilobytes():
    assert format_file_size(1024) == "1.00 KB"


@pytest.mark.parametrize(
    "size, unit",
    [(1024**2, "MB"), (1024**3, "GB"), (1024**4, "TB"), (5 * 1024**4, "TB")],
)
def test_format_file_size_units(size, unit):
    text = format_file_size(size)
    assert text.endswith(" " + unit)
    assert re.fullmatch(r"\d+\.\d\d [KMGT]B", text) is not None


@pytest.mark.parametrize("timestamp", [163, 86400, 1_000_000_000])
def test_format_timestamp_round_trip(timestamp):
    text = format_timestamp(timestamp)
    parsed = datetime.strptime(text, "%Y-%m-%d %H:%M:%S")
    assert int(parsed.timestamp()) == timestamp


def test_format_timestamp_invalid():
    assert format_timestamp(10**20) == "Invalid timestamp"


def test_format_permissions_example():
    assert format_permissions(0o644) == "rw-r--r-- (644)"


@pytest.mark.parametrize("mode", [0o777, 0o000, 0o750, 0o421])
def test_format_permissions_invariants(mode):
    text = format_permissions(mode)
    flags, octal = text.split(" ")
    assert int(octal.strip("()"), 8) == mode
    assert len(flags) == 9
    assert sum(c != "-" for c in flags) == bin(mode).count("1")