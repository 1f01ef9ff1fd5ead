"""Content-type resolution for served files.

The host ``mimetypes`` table is consulted first. Host tables disagree
across platforms for a handful of common extensions, so a small fixed
table fills the gaps and script files are pinned to
``application/javascript`` whatever the host reports.
"""

import mimetypes
import posixpath

DEFAULT_TYPE = "application/octet-stream"
SCRIPT_TYPE = "application/javascript"

_FALLBACK_TYPES: dict[str, str] = {
    ".json": "application/json",
    ".js": SCRIPT_TYPE,
    ".zip": "application/zip",
    ".3gp": "video/3gpp",
    ".7z": "application/x-7z-compressed",
    ".ace": "application/x-ace-compressed",
    ".aac": "audio/x-aac",
    ".ico": "image/x-icon",
    ".png": "image/png",
}

# What hosts report for .js when they get it "wrong"
_SCRIPT_MISREPORTS = frozenset({
    "text/plain",
    "text/plain; charset=utf-8",
    "text/javascript",
    "text/javascript; charset=utf-8",
})


def extension(filename: str) -> str:
    """Return the extension of *filename* including the dot, or ``""``.

    Only the final path element is considered, so ``"v1.2/readme"`` has
    no extension.
    """
    base = posixpath.basename(filename.replace("\\", "/"))
    dot = base.rfind(".")
    if dot == -1:
        return ""
    return base[dot:]


def system_type(ext: str) -> str:
    """Look *ext* up in the host table. Returns ``""`` when unknown.

    Text types carry ``; charset=utf-8``. The lookup is case-sensitive
    first, then case-insensitive.
    """
    if not ext:
        return ""
    content_type = mimetypes.types_map.get(ext) or mimetypes.types_map.get(ext.lower())
    if content_type is None:
        content_type = mimetypes.common_types.get(ext) or mimetypes.common_types.get(ext.lower())
    if content_type is None:
        return ""
    if content_type.startswith("text/") and "charset" not in content_type:
        content_type += "; charset=utf-8"
    return content_type


def type_by_extension(filename: str) -> str:
    """Return the content type for *filename*.

    ``type_by_extension("app.js")``      -> ``"application/javascript"``
    ``type_by_extension("x.unknownext")`` -> ``"application/octet-stream"``
    """
    ext = extension(filename)
    content_type = system_type(ext)
    if not content_type:
        return _FALLBACK_TYPES.get(ext, DEFAULT_TYPE)
    if ext == ".js" and content_type in _SCRIPT_MISREPORTS:
        return SCRIPT_TYPE
    return content_type


mimetypes.init()
