# src/dictfleet/core/bundle.py
"""
Dictionary bundle discovery.

A bundle is one dictionary on disk: a single .mdx file plus any number of
.mdd resource files in the same directory.

Two layouts are supported:

  one dictionary             several dictionaries
  └── root                   └── root
      └── oaldpe.mdx             ├── oxford
                                 │   ├── oaldpe.mdx
                                 │   └── oaldpe.mdd
                                 └── collins
                                     └── collins.mdx
"""

from dataclasses import dataclass, field
from pathlib import Path

from dictfleet.core.errors import (
    AmbiguousBundle,
    DirectoryNotFound,
    DiscoveryError,
    NotADirectory,
)


MAIN_EXT = ".mdx"
AUX_EXT = ".mdd"


@dataclass(frozen=True)
class Bundle:
    root_path: str
    main_file: str = ""
    aux_files: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return bool(self.main_file)

    @property
    def name(self) -> str:
        return Path(self.main_file).stem if self.main_file else Path(self.root_path).name

    def to_dict(self) -> dict:
        return {
            "dir": self.root_path,
            "mdx": self.main_file,
            "mdd": list(self.aux_files),
        }


def _entries(path: Path) -> list[Path]:
    # Lexical order keeps discovery (and port assignment) stable across filesystems.
    try:
        return sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise DiscoveryError(f"cannot read {path}: {e.strerror or e}") from e


def detect(directory: str | Path) -> Bundle:
    """Classify the files directly inside `directory`. Subdirectories are ignored."""
    directory = Path(directory)
    mains = []
    auxs = []

    for entry in _entries(directory):
        if not entry.is_file():
            continue
        ext = entry.suffix.lower()
        if ext == MAIN_EXT:
            mains.append(entry.name)
        elif ext == AUX_EXT:
            auxs.append(entry.name)

    if len(mains) > 1:
        raise AmbiguousBundle(
            f"{directory}: more than one {MAIN_EXT} file ({', '.join(mains)}). "
            f"Put each dictionary in its own directory."
        )

    return Bundle(
        root_path=str(directory),
        main_file=mains[0] if mains else "",
        aux_files=tuple(auxs),
    )


def scan(root: str | Path) -> list[Bundle]:
    """
    Find every bundle under `root`.

    1. Each immediate subdirectory of root is a candidate bundle.
    2. If none qualifies, root itself is tried.

    Returns an empty list when nothing is found.
    """
    root = Path(root)
    if not root.exists():
        raise DirectoryNotFound(f"--dir: directory does not exist: {root}")
    if not root.is_dir():
        raise NotADirectory(f"--dir: not a directory: {root}")

    bundles = []
    for entry in _entries(root):
        if not entry.is_dir():
            continue
        bundle = detect(entry)
        if bundle.is_valid:
            bundles.append(bundle)

    if not bundles:
        bundle = detect(root)
        if bundle.is_valid:
            bundles.append(bundle)

    return bundles


def discover(root: str | Path) -> list[Bundle]:
    """scan() for startup: an empty result is fatal."""
    bundles = scan(root)
    if not bundles:
        raise DiscoveryError(f"No {MAIN_EXT} files found under {root}, please check --dir.")
    return bundles
