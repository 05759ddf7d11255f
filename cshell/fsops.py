"""Built-ins that work on the file system: ls, touch, find, tree, df, cp and friends."""

import errno
import os
import shutil
import stat
import time
from datetime import datetime
from enum import Enum
from typing import NamedTuple

try:
    import grp
    import pwd
except ImportError:  # pragma: no cover - platforms without user databases
    grp = None
    pwd = None

_MIB = 1024 * 1024


class FileKind(Enum):
    """What a directory entry is, as reported without following links."""

    REGULAR = "regular"
    DIRECTORY = "directory"
    OTHER = "other"


class ListingEntry(NamedTuple):
    """A name in a directory together with its kind."""

    name: str
    kind: FileKind

    def __str__(self):
        return self.name + "/" if self.kind is FileKind.DIRECTORY else self.name


class LongEntry(NamedTuple):
    """One line of a long listing."""

    name: str
    kind: FileKind
    mode: int
    links: int
    owner: str
    group: str
    size: int
    modified: float
    blocks: int

    def __str__(self):
        stamp = datetime.fromtimestamp(self.modified).strftime("%b %d %H:%M")
        shown = ListingEntry(self.name, self.kind)
        return (
            f"{mode_string(self.mode)} {self.links:2d} {self.owner} {self.group} "
            f"{self.size:5d} {stamp} {shown}"
        )


class DiskUsage(NamedTuple):
    """Size, used and available space in MiB, with the used percentage."""

    filesystem: str
    total: int
    used: int
    available: int
    percent: float

    def __str__(self):
        header = (
            f"{'Filesystem':<15} {'Size':>10} {'Used':>10} "
            f"{'Avail':>10} {'Use%':>6}"
        )
        row = (
            f"{self.filesystem:<15} {self.total:10d}M {self.used:10d}M "
            f"{self.available:10d}M {self.percent:6.1f}%"
        )
        return f"{header}\n{row}"


def _kind(entry):
    if entry.is_file(follow_symlinks=False):
        return FileKind.REGULAR
    if entry.is_dir(follow_symlinks=False):
        return FileKind.DIRECTORY
    return FileKind.OTHER


def _owner_name(uid):
    if pwd is not None:
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            pass
    return str(uid)


def _group_name(gid):
    if grp is not None:
        try:
            return grp.getgrgid(gid).gr_name
        except KeyError:
            pass
    return str(gid)


def _missing(path):
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(path))


def mode_string(mode):
    """Render permission bits as ``drwxr-xr-x``."""
    bits = (
        (stat.S_IRUSR, "r"), (stat.S_IWUSR, "w"), (stat.S_IXUSR, "x"),
        (stat.S_IRGRP, "r"), (stat.S_IWGRP, "w"), (stat.S_IXGRP, "x"),
        (stat.S_IROTH, "r"), (stat.S_IWOTH, "w"), (stat.S_IXOTH, "x"),
    )
    head = "d" if stat.S_ISDIR(mode) else "-"
    return head + "".join(char if mode & bit else "-" for bit, char in bits)


def touch(path):
    """Create ``path`` if needed and set its access and modification times to now."""
    with open(path, "a"):
        pass
    now = time.time()
    os.utime(path, (now, now))


def find(directory, pattern):
    """Yield ``directory/name`` for every entry below ``directory`` whose name holds ``pattern``.

    An unreadable starting directory raises; unreadable subdirectories are skipped.
    """
    entries = list(os.scandir(directory))
    yield from _find_in(directory, pattern, entries)


def _find_in(directory, pattern, entries):
    for entry in entries:
        path = f"{directory}/{entry.name}"
        if pattern in entry.name:
            yield path
        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False
        if is_dir:
            try:
                children = list(os.scandir(path))
            except OSError:
                continue
            yield from _find_in(path, pattern, children)


def tree(path=".", level=0):
    """Yield the lines of an indented tree of everything below ``path``."""
    entries = list(os.scandir(path))
    yield from _tree_lines(path, level, entries)


def _tree_lines(path, level, entries):
    for entry in entries:
        yield "│   " * level + f"├── {entry.name}"
        child = f"{path}/{entry.name}"
        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False
        if is_dir:
            try:
                children = list(os.scandir(child))
            except OSError as error:
                yield f"Error: Cannot open directory {child}: {error.strerror}"
                continue
            yield from _tree_lines(child, level + 1, children)


def disk_usage(path="."):
    """Report the space of the file system holding ``path``."""
    if hasattr(os, "statvfs"):
        info = os.statvfs(path)
        total = info.f_blocks * info.f_frsize // _MIB
        available = info.f_bfree * info.f_frsize // _MIB
    else:  # pragma: no cover - platforms without statvfs
        usage = shutil.disk_usage(path)
        total = usage.total // _MIB
        available = usage.free // _MIB
    used = total - available
    percent = used / total * 100 if total else 0.0
    return DiskUsage(os.fspath(path), total, used, available, percent)


def copy_file(source, destination):
    """Copy ``source`` over ``destination``.

    Refuses with FileExistsError when the destination exists and was
    modified more recently than the source.
    """
    with open(source, "rb") as src:
        if os.path.exists(destination):
            newer = int(os.stat(destination).st_mtime) > int(os.stat(source).st_mtime)
            if newer:
                raise FileExistsError(
                    errno.EEXIST,
                    f"{os.fspath(destination)} is more recently updated than "
                    f"{os.fspath(source)}",
                    os.fspath(destination),
                )
        with open(destination, "wb") as dst:
            shutil.copyfileobj(src, dst)


def move_file(source, destination):
    """Rename ``source`` to ``destination``."""
    if not os.path.exists(source):
        raise _missing(source)
    os.rename(source, destination)


def remove_file(path):
    """Remove the file, or empty directory, at ``path``."""
    if not os.path.exists(path):
        raise _missing(path)
    if os.path.isdir(path) and not os.path.islink(path):
        os.rmdir(path)
    else:
        os.remove(path)


def make_directory(path):
    """Create the directory ``path`` with full permissions before the umask."""
    os.mkdir(path, 0o777)


def remove_directory(path):
    """Remove the empty directory ``path``."""
    os.rmdir(path)


def list_directory(path="."):
    """Return the entries of ``path`` without ``.`` and ``..``."""
    with os.scandir(path) as entries:
        return [ListingEntry(entry.name, _kind(entry)) for entry in entries]


def long_listing(path="."):
    """Return detailed entries of ``path``; entries that cannot be stat'ed are left out."""
    result = []
    with os.scandir(path) as entries:
        for entry in entries:
            try:
                info = os.stat(os.path.join(path, entry.name))
            except OSError:
                continue
            result.append(
                LongEntry(
                    name=entry.name,
                    kind=_kind(entry),
                    mode=info.st_mode,
                    links=info.st_nlink,
                    owner=_owner_name(info.st_uid),
                    group=_group_name(info.st_gid),
                    size=info.st_size,
                    modified=info.st_mtime,
                    blocks=getattr(info, "st_blocks", 0),
                )
            )
    return result