"""Directory-serving responder.

``FileServer`` turns a request path into a response from a
``FileSystem``: files (with byte ranges and conditional GET), index
pages, and HTML directory listings. It is the serving primitive the
static handler builder composes; prefix stripping, gzip, and exception
routes are layered around it, not inside it.

Status mapping:

- missing file or directory → ``NotFound`` (404)
- permission denied or path outside the root → ``Forbidden`` (403)
- unsatisfiable ``Range`` → ``RangeNotSatisfiable`` (416)
- any other ``OSError`` → ``HTTPError(500)``
"""

from __future__ import annotations

import email.utils
import html
import posixpath
import secrets
from dataclasses import dataclass
from urllib.parse import quote

import anyio.to_thread

from staticweb.errors import Forbidden, HTTPError, NotFound, RangeNotSatisfiable
from staticweb.filesystem import File, FileInfo, FileSystem
from staticweb.http.request import Request
from staticweb.http.response import Response
from staticweb.mime import type_by_extension

INDEX_PAGE = "index.html"
LISTING_CONTENT_TYPE = "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class ByteRange:
    """One satisfiable byte range: ``length`` bytes from ``start``."""

    start: int
    length: int

    def content_range(self, size: int) -> str:
        return f"bytes {self.start}-{self.start + self.length - 1}/{size}"


class InvalidRange(ValueError):
    """The ``Range`` header is malformed, or nothing in it overlaps the file."""


def parse_range(header: str | None, size: int) -> list[ByteRange]:
    """Parse a ``Range`` header against a file of *size* bytes.

    Returns an empty list when there is no header. Ranges that start past
    the end of the file are dropped; if that leaves nothing, or the header
    is malformed, ``InvalidRange`` is raised.
    """
    if not header:
        return []
    if not header.startswith("bytes="):
        raise InvalidRange(header)
    ranges: list[ByteRange] = []
    no_overlap = False
    for part in header[len("bytes="):].split(","):
        part = part.strip()
        if not part:
            continue
        start_text, sep, end_text = part.partition("-")
        if not sep:
            raise InvalidRange(header)
        start_text, end_text = start_text.strip(), end_text.strip()
        if not start_text:
            # Suffix range: the last N bytes
            if not end_text.isdigit():
                raise InvalidRange(header)
            n = int(end_text)
            if n == 0:
                no_overlap = True
                continue
            n = min(n, size)
            ranges.append(ByteRange(start=size - n, length=n))
            continue
        if not start_text.isdigit():
            raise InvalidRange(header)
        start = int(start_text)
        if start >= size:
            no_overlap = True
            continue
        if not end_text:
            ranges.append(ByteRange(start=start, length=size - start))
            continue
        if not end_text.isdigit():
            raise InvalidRange(header)
        end = int(end_text)
        if start > end:
            raise InvalidRange(header)
        end = min(end, size - 1)
        ranges.append(ByteRange(start=start, length=end - start + 1))
    if no_overlap and not ranges:
        raise InvalidRange(header)
    return ranges


def to_http_error(exc: OSError) -> HTTPError:
    """Map a file system error to the status the client should see."""
    if isinstance(exc, FileNotFoundError | NotADirectoryError):
        return NotFound()
    if isinstance(exc, PermissionError):
        return Forbidden()
    return HTTPError(status=500, detail="Internal Server Error")


def local_redirect(request: Request, location: str) -> Response:
    """301 to a location relative to the current URL, keeping the query."""
    if request.query_string:
        location = f"{location}?{request.query_string.decode('latin-1')}"
    return Response(body="", status=301).with_header("Location", location)


def _http_date(timestamp: float) -> str:
    return email.utils.formatdate(timestamp, usegmt=True)


def _not_modified(request: Request, info: FileInfo) -> bool:
    if request.method not in ("GET", "HEAD") or not info.mtime:
        return False
    if "if-none-match" in request.headers:
        return False
    header = request.headers.get("if-modified-since")
    if not header:
        return False
    try:
        since = email.utils.parsedate_to_datetime(header)
    except (TypeError, ValueError):
        return False
    # HTTP dates have one-second resolution
    return int(info.mtime) <= since.timestamp()


class FileServer:
    """Serves a ``FileSystem`` as an async request handler.

    Usage::

        serve = FileServer(Dir("./public"))
        response = await serve(request)

    The request path is treated as a slash-rooted name inside the file
    system. Blocking I/O runs in a worker thread.
    """

    __slots__ = ("filesystem", "index")

    def __init__(self, filesystem: FileSystem, *, index: str = INDEX_PAGE) -> None:
        self.filesystem = filesystem
        self.index = index

    async def __call__(self, request: Request) -> Response:
        url = request.path
        if not url.startswith("/"):
            url = "/" + url
            request = request.with_path(url)

        # /dir/index.html is served as /dir/
        if url.endswith("/" + self.index):
            return local_redirect(request, "./")

        return await anyio.to_thread.run_sync(self._serve, request, _clean(url))

    # ------------------------------------------------------------------
    # Blocking helpers (worker thread)
    # ------------------------------------------------------------------

    def _serve(self, request: Request, name: str) -> Response:
        try:
            file = self.filesystem.open(name)
        except OSError as exc:
            raise to_http_error(exc) from exc

        try:
            info = file.stat()
            url = request.path
            if info.is_dir:
                if not url.endswith("/"):
                    return local_redirect(request, posixpath.basename(url) + "/")
            elif url.endswith("/"):
                return local_redirect(request, "../" + posixpath.basename(url.rstrip("/")))

            if info.is_dir:
                index_file, index_info = self._open_index(name)
                if index_file is None:
                    return self._list_directory(request, file, info)
                file.close()
                file, info, name = index_file, index_info, posixpath.join(name, self.index)

            return self._serve_content(request, file, info, name)
        except OSError as exc:
            raise to_http_error(exc) from exc
        finally:
            file.close()

    def _open_index(self, directory: str) -> tuple[File | None, FileInfo | None]:
        try:
            index_file = self.filesystem.open(posixpath.join(directory, self.index))
        except OSError:
            return None, None
        try:
            index_info = index_file.stat()
        except OSError:
            index_file.close()
            return None, None
        if index_info.is_dir:
            index_file.close()
            return None, None
        return index_file, index_info

    def _list_directory(self, request: Request, file: File, info: FileInfo) -> Response:
        if _not_modified(request, info):
            return Response(body="", status=304)
        entries = sorted(file.readdir(), key=lambda entry: entry.name)
        lines = ["<pre>\n"]
        for entry in entries:
            label = entry.name + "/" if entry.is_dir else entry.name
            href = quote(label)
            lines.append(f'<a href="{html.escape(href)}">{html.escape(label)}</a>\n')
        lines.append("</pre>\n")
        response = Response(body="".join(lines), content_type=LISTING_CONTENT_TYPE)
        if info.mtime:
            response = response.with_header("Last-Modified", _http_date(info.mtime))
        if request.method == "HEAD":
            body = response.body_bytes
            response = response.with_body(b"").with_header("Content-Length", str(len(body)))
        return response

    def _serve_content(self, request: Request, file: File, info: FileInfo, name: str) -> Response:
        last_modified = _http_date(info.mtime) if info.mtime else None
        if _not_modified(request, info):
            response = Response(body="", status=304)
            if last_modified:
                response = response.with_header("Last-Modified", last_modified)
            return response

        content_type = type_by_extension(name)
        size = info.size

        range_header = request.headers.get("range")
        if_range = request.headers.get("if-range")
        if range_header and if_range and if_range != last_modified:
            range_header = None

        try:
            ranges = parse_range(range_header, size)
        except InvalidRange:
            raise RangeNotSatisfiable(size) from None
        if sum(r.length for r in ranges) > size:
            # Overlapping ranges that add up to more than the file: send it whole
            ranges = []

        headers: list[tuple[str, str]] = [("Accept-Ranges", "bytes")]
        if last_modified:
            headers.append(("Last-Modified", last_modified))

        if not ranges:
            status = 200
            body = b"" if request.method == "HEAD" else file.read()
            length = size
        elif len(ranges) == 1:
            status = 206
            (byte_range,) = ranges
            headers.append(("Content-Range", byte_range.content_range(size)))
            length = byte_range.length
            body = b""
            if request.method != "HEAD":
                file.seek(byte_range.start)
                body = file.read(byte_range.length)
        else:
            status = 206
            boundary = secrets.token_hex(15)
            body = self._multipart(file, ranges, size, content_type, boundary)
            length = len(body)
            content_type = f"multipart/byteranges; boundary={boundary}"
            if request.method == "HEAD":
                body = b""

        response = Response(body=body, status=status, content_type=content_type, headers=tuple(headers))
        if request.method == "HEAD":
            response = response.with_header("Content-Length", str(length))
        return response

    @staticmethod
    def _multipart(
        file: File,
        ranges: list[ByteRange],
        size: int,
        content_type: str,
        boundary: str,
    ) -> bytes:
        parts: list[bytes] = []
        for byte_range in ranges:
            head = (
                f"--{boundary}\r\n"
                f"Content-Type: {content_type}\r\n"
                f"Content-Range: {byte_range.content_range(size)}\r\n\r\n"
            )
            file.seek(byte_range.start)
            parts.append(head.encode("latin-1"))
            parts.append(file.read(byte_range.length))
            parts.append(b"\r\n")
        parts.append(f"--{boundary}--\r\n".encode("latin-1"))
        return b"".join(parts)


def _clean(url: str) -> str:
    """Normalize a slash-rooted URL path, keeping a trailing slash."""
    cleaned = posixpath.normpath(url)
    # normpath keeps a leading "//"
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    if url.endswith("/") and cleaned != "/":
        cleaned += "/"
    return cleaned
