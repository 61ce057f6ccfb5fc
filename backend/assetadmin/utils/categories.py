"""File category lookup by extension."""

from __future__ import annotations

from typing import Optional

APP_CATEGORIES: dict[str, tuple[str, ...]] = {
    "archive": ("ace", "arc", "arj", "bz", "bz2", "cab", "dmg", "gz", "hqx", "jar",
                "rar", "sit", "sitx", "tar", "tgz", "zip", "zipx"),
    "audio": ("aif", "aifc", "aiff", "apl", "au", "avr", "cda", "m4a", "mid",
              "midi", "mp3", "ogg", "ra", "ram", "rm", "snd", "wav", "wma"),
    "document": ("css", "csv", "doc", "docx", "dotm", "dotx", "htm", "html", "gpx",
                 "js", "kml", "odt", "ods", "odp", "pages", "pdf", "potm", "potx",
                 "pps", "ppt", "pptx", "rtf", "txt", "xhtml", "xls", "xlsx", "xltm",
                 "xltx", "xml"),
    "image": ("alpha", "als", "bmp", "cel", "gif", "ico", "icon", "jpeg", "jpg",
              "pcx", "png", "ps", "psd", "tif", "tiff", "svg", "webp"),
    "flash": ("fla", "swf"),
    "video": ("asf", "avi", "flv", "ifo", "m1v", "m2v", "m4v", "mkv", "mov", "mp2",
              "mp4", "mpa", "mpe", "mpeg", "mpg", "ogv", "qt", "vob", "webm", "wmv"),
}

_EXTENSION_TO_CATEGORY = {
    ext: category for category, exts in APP_CATEGORIES.items() for ext in exts
}


def get_extension(name: str) -> str:
    """Lower-cased extension without the dot ('' if none)."""
    base = name.rsplit("/", 1)[-1]
    if "." not in base.lstrip("."):
        return ""
    return base.rsplit(".", 1)[-1].lower()


def category_for(name: str, is_folder: bool = False) -> Optional[str]:
    if is_folder:
        return "folder"
    return _EXTENSION_TO_CATEGORY.get(get_extension(name))
