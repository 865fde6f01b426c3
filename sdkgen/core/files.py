"""
In-memory representation of the generated package.

Nothing in this module touches the filesystem; the packaging step is the only
place generated content is persisted.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from .paths import ExportedFilePath


class SourceFile:
    """A generated module under construction.

    Renderers append top-level statements (already formatted code blocks) and
    declare the public names they define. Imports are kept separately and
    prepended when the file is finalized.
    """

    def __init__(self, filepath: ExportedFilePath):
        self.filepath = filepath
        self._statements: List[str] = []
        self._exported_names: List[str] = []
        self._text: Optional[str] = None

    @property
    def path(self) -> str:
        return self.filepath.to_filepath()

    def add_statement(self, code: str, *, exports: Tuple[str, ...] = ()) -> None:
        """Append a top-level statement and record the names it makes public."""
        if self._text is not None:
            raise RuntimeError(f"{self.path} is already finalized")
        code = code.strip("\n")
        if not code.strip():
            return
        self._statements.append(code)
        for name in exports:
            if name not in self._exported_names:
                self._exported_names.append(name)

    @property
    def statements(self) -> List[str]:
        return list(self._statements)

    @property
    def exported_names(self) -> List[str]:
        return list(self._exported_names)

    def is_empty(self) -> bool:
        return not self._statements

    def finalize(self, header: str, imports: List[str]) -> str:
        """Render the module text: header, imports, then statements."""
        import_block = "\n".join(["from __future__ import annotations"] + list(imports))
        if header:
            import_block = header.rstrip("\n") + "\n\n" + import_block
        if self._exported_names:
            names = ", ".join(f'"{name}"' for name in self._exported_names)
            self._statements.append(f"__all__ = [{names}]")
        self._text = "\n\n\n".join([import_block] + self._statements) + "\n"
        return self._text

    @property
    def text(self) -> str:
        if self._text is None:
            raise RuntimeError(f"{self.path} has not been finalized")
        return self._text


class VirtualFileTree:
    """Finished files of the generated package, keyed by relative path."""

    def __init__(self):
        self._files: Dict[str, str] = {}

    def write(self, path: str, content: str) -> None:
        if path in self._files:
            raise ValueError(f"File already exists in the generated tree: {path}")
        self._files[path] = content

    def read(self, path: str) -> str:
        return self._files[path]

    def exists(self, path: str) -> bool:
        return path in self._files

    def paths(self) -> List[str]:
        return sorted(self._files)

    def items(self) -> Iterator[Tuple[str, str]]:
        for path in self.paths():
            yield path, self._files[path]

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: str) -> bool:
        return path in self._files
