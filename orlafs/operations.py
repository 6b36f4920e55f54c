"""File system operations: read, write, list, inspect, create, remove, move, copy.

Every operation returns a dictionary of result fields. If it fails, it raises
:class:`FsToolError`, whose message is suitable for showing to a caller.
"""

from __future__ import annotations

import errno
import os
import re
import shutil
import stat as _stat
from typing import Any, Iterator

__all__ = [
    "FsToolError",
    "expand_path",
    "read",
    "write",
    "list_dir",
    "exists",
    "stat",
    "mkdir",
    "rm",
    "mv",
    "cp",
]

_DIR_MODE = 0o755

_VAR_PATTERN = re.compile(
    r"\$(?:\{(?P<braced>[^}]*)\}|(?P<open>\{)|(?P<special>[*#$@!?\-0-9])"
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*))"
)


class FsToolError(Exception):
    """Raised when a file system operation cannot be carried out."""

    @property
    def message(self) -> str:
        return str(self)


def _expand_vars(text: str) -> str:
    """Replace $VAR and ${VAR} with environment values; unset names become empty."""

    def substitute(match: re.Match[str]) -> str:
        if match.group("open") is not None:
            return ""
        name = match.group("braced")
        if name is None:
            name = match.group("special") or match.group("name")
        if not name:
            return ""
        return os.environ.get(name, "")

    return _VAR_PATTERN.sub(substitute, text)


def _home_dir() -> str:
    key = "USERPROFILE" if os.name == "nt" else "HOME"
    home = os.environ.get(key, "")
    if not home:
        raise FsToolError(f"failed to get home directory: ${key} is not defined")
    return home


def _clean(path: str) -> str:
    cleaned = os.path.normpath(path)
    if os.sep == "/" and cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _base_name(path: str) -> str:
    return os.path.basename(path) or path


def _parent_dir(path: str) -> str:
    return os.path.dirname(path) or "."


def _item_type(mode: int) -> str:
    """Classify a file mode as "directory" or "file"."""
    if _stat.S_ISDIR(mode):
        return "directory"
    return "file"


def _require(value: str, name: str) -> None:
    if not value:
        raise FsToolError(f"{name} is required")


def expand_path(path: str) -> str:
    """Expand environment variables and a leading ``~``, then clean the path."""
    expanded = _expand_vars(path)
    if expanded == "~":
        return _clean(_home_dir())
    if expanded.startswith("~/"):
        return _clean(expanded.replace("~", _home_dir(), 1))
    return _clean(expanded)


def read(path: str) -> dict[str, Any]:
    """Return the UTF-8 text of a file as ``{"content": ...}``."""
    _require(path, "path")
    p = expand_path(path)
    try:
        st = os.stat(p)
    except FileNotFoundError as err:
        raise FsToolError(f"file not found: {path}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    if _stat.S_ISDIR(st.st_mode):
        raise FsToolError(f"path is not a file: {path}")
    try:
        with open(p, "rb") as handle:
            data = handle.read()
    except PermissionError as err:
        raise FsToolError(f"permission denied: {path}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    try:
        content = data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise FsToolError(f"file is not valid UTF-8: {path}") from err
    return {"content": content}


def write(path: str, content: str, create_dirs: bool) -> dict[str, Any]:
    """Write ``content`` to a file, optionally creating its parent directories."""
    _require(path, "path")
    _require(content, "content")
    p = expand_path(path)
    try:
        if create_dirs:
            os.makedirs(_parent_dir(p), mode=_DIR_MODE, exist_ok=True)
        with open(p, "wb") as handle:
            handle.write(content.encode("utf-8"))
    except PermissionError as err:
        raise FsToolError(f"permission denied: {path}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    return {"path": p}


def _walk(directory: str) -> Iterator[tuple[str, str, int]]:
    """Yield (path, name, mode) depth first, in lexical order, without following links."""
    with os.scandir(directory) as scanner:
        entries = sorted(scanner, key=lambda entry: entry.name)
    for entry in entries:
        entry_path = os.path.join(directory, entry.name)
        mode = entry.stat(follow_symlinks=False).st_mode
        yield entry_path, entry.name, mode
        if _stat.S_ISDIR(mode):
            yield from _walk(entry_path)


def list_dir(path: str, recursive: bool) -> dict[str, Any]:
    """List a directory's entries as ``{"items": [...], "count": n}``."""
    _require(path, "path")
    p = expand_path(path)
    try:
        st = os.stat(p)
    except FileNotFoundError as err:
        raise FsToolError(f"directory not found: {path}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    if not _stat.S_ISDIR(st.st_mode):
        raise FsToolError(f"path is not a directory: {path}")

    items: list[dict[str, Any]] = []
    if recursive:
        try:
            if _stat.S_ISDIR(os.lstat(p).st_mode):
                for walk_path, name, mode in _walk(p):
                    items.append(
                        {
                            "path": walk_path,
                            "name": name,
                            "type": _item_type(mode),
                            "relative": os.path.relpath(walk_path, p),
                        }
                    )
        except PermissionError as err:
            raise FsToolError(f"permission denied: {path}") from err
        except OSError as err:
            raise FsToolError(str(err)) from err
        return {"items": items, "count": len(items)}

    try:
        with os.scandir(p) as scanner:
            entries = sorted(scanner, key=lambda entry: entry.name)
    except PermissionError as err:
        raise FsToolError(f"permission denied: {path}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    for entry in entries:
        try:
            mode = entry.stat(follow_symlinks=False).st_mode
        except OSError as err:
            raise FsToolError(str(err)) from err
        items.append(
            {
                "path": os.path.join(p, entry.name),
                "name": entry.name,
                "type": _item_type(mode),
            }
        )
    return {"items": items, "count": len(items)}


def exists(path: str) -> dict[str, Any]:
    """Report whether a path exists and, if so, what kind of entry it is."""
    _require(path, "path")
    p = expand_path(path)
    try:
        st = os.stat(p)
    except FileNotFoundError:
        return {"exists": False, "path": p}
    except OSError as err:
        raise FsToolError(str(err)) from err
    is_dir = _stat.S_ISDIR(st.st_mode)
    return {
        "exists": True,
        "path": p,
        "type": _item_type(st.st_mode),
        "is_file": not is_dir,
        "is_dir": is_dir,
    }


def stat(path: str) -> dict[str, Any]:
    """Return size, permissions, times and kind of a file or directory."""
    _require(path, "path")
    p = expand_path(path)
    try:
        st = os.stat(p)
    except FileNotFoundError as err:
        raise FsToolError(f"path not found: {path}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    is_dir = _stat.S_ISDIR(st.st_mode)
    modified = st.st_mtime_ns // 1_000_000_000
    return {
        "path": p,
        "name": _base_name(p),
        "type": _item_type(st.st_mode),
        "size": st.st_size,
        "mode": format(st.st_mode & 0o777, "o"),
        "modified": modified,
        "accessed": modified,
        "created": modified,
        "is_file": not is_dir,
        "is_dir": is_dir,
        "is_symlink": _stat.S_ISLNK(st.st_mode),
    }


def mkdir(path: str, parents: bool) -> dict[str, Any]:
    """Create a directory, optionally with its missing parents."""
    _require(path, "path")
    p = expand_path(path)
    try:
        st = os.stat(p)
    except OSError:
        pass
    else:
        if _stat.S_ISDIR(st.st_mode):
            return {"path": p, "message": "directory already exists"}
        raise FsToolError(f"path exists but is not a directory: {path}")
    try:
        if parents:
            os.makedirs(p, mode=_DIR_MODE, exist_ok=True)
        else:
            os.mkdir(p, _DIR_MODE)
    except PermissionError as err:
        raise FsToolError(f"permission denied: {path}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    return {"path": p}


def rm(path: str, recursive: bool) -> dict[str, Any]:
    """Remove a file, or a directory (its contents too when ``recursive``)."""
    _require(path, "path")
    p = expand_path(path)
    try:
        st = os.stat(p)
    except FileNotFoundError as err:
        raise FsToolError(f"path not found: {path}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    try:
        if not _stat.S_ISDIR(st.st_mode) or os.path.islink(p):
            os.remove(p)
        elif recursive:
            shutil.rmtree(p)
        else:
            try:
                os.rmdir(p)
            except OSError as err:
                if err.errno == errno.ENOTEMPTY:
                    raise FsToolError(
                        f"directory not empty: {path}. use recursive=true"
                    ) from err
                raise
    except PermissionError as err:
        raise FsToolError(f"permission denied: {path}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    return {"path": p}


def mv(source: str, dest: str) -> dict[str, Any]:
    """Move or rename a file or directory."""
    _require(source, "source")
    _require(dest, "dest")
    src = expand_path(source)
    dst = expand_path(dest)
    try:
        os.stat(src)
    except FileNotFoundError as err:
        raise FsToolError(f"source not found: {source}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    try:
        os.replace(src, dst)
    except PermissionError as err:
        raise FsToolError(f"permission denied: {source}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    return {"source": src, "dest": dst}


def _copy(src: str, dst: str) -> None:
    st = os.lstat(src)
    if _stat.S_ISLNK(st.st_mode):
        os.symlink(os.readlink(src), dst)
    elif _stat.S_ISDIR(st.st_mode):
        os.makedirs(dst, mode=_DIR_MODE, exist_ok=True)
        with os.scandir(src) as scanner:
            names = sorted(entry.name for entry in scanner)
        for name in names:
            _copy(os.path.join(src, name), os.path.join(dst, name))
        os.chmod(dst, _stat.S_IMODE(st.st_mode))
    else:
        os.makedirs(_parent_dir(dst), exist_ok=True)
        shutil.copyfile(src, dst)
        os.chmod(dst, _stat.S_IMODE(st.st_mode))


def cp(source: str, dest: str, recursive: bool) -> dict[str, Any]:
    """Copy a file, or a directory tree when ``recursive``."""
    _require(source, "source")
    _require(dest, "dest")
    src = expand_path(source)
    dst = expand_path(dest)
    try:
        st = os.stat(src)
    except FileNotFoundError as err:
        raise FsToolError(f"source not found: {source}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    if _stat.S_ISDIR(st.st_mode) and not recursive:
        raise FsToolError("source is a directory. use recursive=true")
    try:
        _copy(src, dst)
    except PermissionError as err:
        raise FsToolError(f"permission denied: {source}") from err
    except OSError as err:
        raise FsToolError(str(err)) from err
    return {"source": src, "dest": dst}