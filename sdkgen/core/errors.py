"""
Exceptions raised by the generation pipeline.

Every fatal condition derives from GeneratorError so callers can abort a run
with a single except clause.
"""


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class InvalidGeneratorStateError(GeneratorError):
    """Raised when a pipeline step runs out of order or after finalize."""

    pass


class UnknownDeclarationError(GeneratorError):
    """Raised when the IR references a declaration it does not contain."""

    def __init__(self, kind: str, name):
        self.kind = kind
        self.name = name
        super().__init__(f"Unknown {kind} declaration: {name}")


class AmbiguousExportError(GeneratorError):
    """Raised when two files in one directory export the same public name."""

    def __init__(self, symbol: str, first_file: str, second_file: str):
        self.symbol = symbol
        self.first_file = first_file
        self.second_file = second_file
        super().__init__(
            f"Ambiguous export '{symbol}': exported by both "
            f"{first_file} and {second_file}"
        )


class CyclicUtilityDependencyError(GeneratorError):
    """Raised when core utility descriptors depend on each other in a cycle."""

    def __init__(self, cycle):
        self.cycle = list(cycle)
        super().__init__(
            "Cyclic core utility dependency: " + " -> ".join(self.cycle)
        )


class DependencyVersionConflictError(GeneratorError):
    """Raised in strict mode when one package is requested at two versions."""

    def __init__(self, package: str, existing: str, requested: str):
        self.package = package
        self.existing = existing
        self.requested = requested
        super().__init__(
            f"Conflicting versions for '{package}': {existing} vs {requested}"
        )


class IRLoadError(GeneratorError):
    """Raised when an IR document cannot be read or parsed."""

    pass
