"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def ungeneratable_domain(type_name: str, reason: str) -> Diagnostic:
        """Function domain type has no stable digest.

        Args:
            type_name: Name of the type that could not be digested
            reason: Why the value has no stable encoding

        Returns:
            Diagnostic for UNGENERATABLE_DOMAIN
        """
        msg = f"Cannot derive a stable digest for domain type '{type_name}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.UNGENERATABLE_DOMAIN,
            message=msg,
            hint="Pass a custom digest= to FunctionGenerator for this domain type",
            type_name=type_name,
        )

    @staticmethod
    def generator_exhausted(label: str, attempts: int, seed: str, size: int) -> Diagnostic:
        """Constrained generator found no valid value.

        Args:
            label: Generator label
            attempts: Number of candidate values rejected
            seed: Hex seed of the generation request
            size: Size hint of the generation request

        Returns:
            Diagnostic for GENERATOR_EXHAUSTED
        """
        msg = f"Generator '{label}' found no valid value after {attempts} attempts"
        return Diagnostic(
            code=DiagnosticCode.GENERATOR_EXHAUSTED,
            message=msg,
            hint="Loosen the predicate or generate valid values directly",
            seed=seed,
            size=size,
        )

    @staticmethod
    def empty_choice(label: str) -> Diagnostic:
        """Choice generator built from no alternatives.

        Args:
            label: Generator label

        Returns:
            Diagnostic for EMPTY_CHOICE
        """
        msg = f"Generator '{label}' has no alternatives to choose from"
        return Diagnostic(
            code=DiagnosticCode.EMPTY_CHOICE,
            message=msg,
            hint="Supply at least one element or generator",
        )

    @staticmethod
    def generator_failed(label: str, error: BaseException, seed: str, size: int) -> Diagnostic:
        """Generator raised an unexpected exception.

        Args:
            label: Generator label or repr
            error: The exception raised by the generator
            seed: Hex seed of the generation request
            size: Size hint of the generation request

        Returns:
            Diagnostic for GENERATOR_FAILED
        """
        msg = f"Generator '{label}' raised {type(error).__name__}: {error}"
        return Diagnostic(
            code=DiagnosticCode.GENERATOR_FAILED,
            message=msg,
            hint="Generators must be total within their size bound",
            type_name=type(error).__name__,
            seed=seed,
            size=size,
        )

    @staticmethod
    def unknown_law(name: str, available: tuple[str, ...]) -> Diagnostic:
        """Law name not present in the suite.

        Args:
            name: Requested law name
            available: Registered law names

        Returns:
            Diagnostic for UNKNOWN_LAW
        """
        msg = f"Law '{name}' is not registered"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LAW,
            message=msg,
            hint="Available laws: " + ", ".join(available),
            law=name,
        )

    @staticmethod
    def binding_mismatch(law: str, expected: str, received: str) -> Diagnostic:
        """Binding kind does not match the law's structure kind.

        Args:
            law: Law name
            expected: Structure kind the law applies to
            received: Structure kind of the supplied binding

        Returns:
            Diagnostic for BINDING_MISMATCH
        """
        msg = f"Law '{law}' applies to {expected} bindings, got a {received} binding"
        return Diagnostic(
            code=DiagnosticCode.BINDING_MISMATCH,
            message=msg,
            hint=f"Bind the structure with a {expected} binding",
            law=law,
        )

    @staticmethod
    def duplicate_law(name: str) -> Diagnostic:
        """Law registered twice under the same name.

        Args:
            name: Law name

        Returns:
            Diagnostic for DUPLICATE_LAW
        """
        msg = f"Law '{name}' is already registered"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_LAW,
            message=msg,
            hint="Pass replace=True to override an existing law",
            law=name,
        )
