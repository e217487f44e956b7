import json
import shutil
from pathlib import Path
from typing import Any

from gqlg import log
from gqlg.config import DEFAULT_FILE_EXTENSION
from gqlg.generator import OperationDocument

INDEX_FILENAME = "index.json"


class OperationWriter:
    """Persists generated operation documents, one file per root field, plus a JSON index."""

    def __init__(self, output_dir: Path, file_extension: str = DEFAULT_FILE_EXTENSION, clean: bool = False) -> None:
        self.output_dir = output_dir
        self.file_extension = file_extension
        self.clean = clean

    def document_path(self, document: OperationDocument) -> Path:
        return self.output_dir / document.category / f"{document.name}.{self.file_extension}"

    def build_index(self, documents: list[OperationDocument]) -> dict[str, dict[str, Any]]:
        """
        Build the index of written documents, grouped by category.

        Args:
            documents: The generated documents

        Returns:
            category -> field name -> file, operation, hasArguments and variable types
        """
        index: dict[str, dict[str, Any]] = {}
        for document in documents:
            index.setdefault(document.category, {})[document.name] = {
                "file": self.document_path(document).relative_to(self.output_dir).as_posix(),
                "operation": document.operation,
                "hasArguments": document.has_arguments,
                "variables": document.variable_types,
            }
        return index

    def stale_documents(self, written: list[Path]) -> list[Path]:
        """Document files under the output directory that this run did not write."""
        current = set(written)
        return sorted(path for path in self.output_dir.glob(f"*/*.{self.file_extension}") if path not in current)

    def write(self, documents: list[OperationDocument]) -> list[Path]:
        """
        Write every document and the index file.

        Returns:
            Paths of the written document files

        Raises:
            OSError: If a directory or file cannot be written
        """
        if self.clean and self.output_dir.exists():
            log.info(f"Removing previous output in {self.output_dir}")
            shutil.rmtree(self.output_dir)

        written: list[Path] = []
        for document in documents:
            path = self.document_path(document)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(document.text, encoding="utf-8")
            log.debug(f"Wrote {document.operation} '{document.name}' to {path}")
            written.append(path)

        for path in self.stale_documents(written):
            log.debug(f"Leaving stale document {path} from an earlier run, use --clean to remove it")

        self.output_dir.mkdir(parents=True, exist_ok=True)
        index_path = self.output_dir / INDEX_FILENAME
        index_path.write_text(json.dumps(self.build_index(documents), indent=2) + "\n", encoding="utf-8")
        log.info(f"Wrote {len(written)} document(s) and {index_path}")
        return written
