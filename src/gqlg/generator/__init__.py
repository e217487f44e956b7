"""Operation document generator for gqlg."""

from .document import OperationDocument, OperationGenerator, assemble_document, generate_operations

__all__ = ["OperationDocument", "OperationGenerator", "assemble_document", "generate_operations"]
