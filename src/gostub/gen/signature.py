"""signature.py - the template-facing view of one declaration.

SignatureView derives everything a test template needs from a
FunctionDeclaration: the test name, parameter declarations, call
arguments, synthetic result names and the error/variadic/method flags.
every attribute is a pure function of the declaration.

naming rules:
    Add             -> TestAdd
    add             -> Test_add
    (*Reader) Read  -> TestReaderRead
    (*Reader) read  -> Test_Reader_read

results are always got1, got2, ... in declaration order. when the last
result is of type `error` its name becomes `err` and it drops out of
the values compared against want fields.

in the world: the sketch. the declaration is the building, this is
the outline you trace before drawing the test.
"""

from dataclasses import dataclass

from gostub.gen.parser import Field, FunctionDeclaration

ERROR_TYPE = "error"
VARIADIC_MARKER = "..."


@dataclass(frozen=True)
class SignatureView:
    decl: FunctionDeclaration

    @property
    def name(self) -> str:
        return self.decl.name

    @property
    def line(self) -> int:
        return self.decl.line

    # ---- receiver ----

    @property
    def is_method(self) -> bool:
        return self.decl.receiver is not None

    @property
    def receiver_type(self) -> str:
        """receiver type as declared, pointer kept. '' for free functions."""
        receiver = self.decl.receiver
        return receiver.type if receiver is not None else ""

    @property
    def receiver_name(self) -> str:
        """receiver type name for prose: no pointer, no type arguments."""
        return self.receiver_type.lstrip("*").split("[", 1)[0].strip()

    @property
    def test_name(self) -> str:
        name = self.decl.name
        if not name[:1].isupper():
            prefix = f"{self.receiver_name}_" if self.is_method else ""
            return f"Test_{prefix}{name}"
        return f"Test{self.receiver_name}{name}"

    # ---- params ----

    @property
    def num_params(self) -> int:
        return sum(f.width for f in self.decl.params)

    @property
    def is_variadic(self) -> bool:
        return bool(self.decl.params) and self.decl.params[-1].variadic

    @property
    def params(self) -> list[str]:
        """'name type' for every named parameter. variadics become slices."""
        out = []
        for f in self.decl.params:
            for n in f.names:
                out.append(f"{n} {_param_type(f)}")
        return out

    @property
    def param_names(self) -> list[str]:
        """call-site argument names. the variadic one carries the ... marker."""
        out = []
        for f in self.decl.params:
            for n in f.names:
                out.append(f"{n}{VARIADIC_MARKER}" if f.variadic else n)
        return out

    # ---- results ----

    @property
    def num_results(self) -> int:
        return sum(f.width for f in self.decl.results)

    @property
    def returns_error(self) -> bool:
        results = self.decl.results
        return bool(results) and results[-1].type == ERROR_TYPE

    @property
    def result_names(self) -> list[str]:
        """got1..gotN, the last one renamed to err under the error convention."""
        names = [f"got{n}" for n in range(1, self.num_results + 1)]
        if self.returns_error:
            names[-1] = "err"
        return names

    @property
    def non_error_result_names(self) -> list[str]:
        names = self.result_names
        return names[:-1] if self.returns_error else names

    @property
    def results(self) -> list[str]:
        """'gotN type' for every result except a trailing error."""
        out = []
        n = 1
        for f in self.decl.results:
            for _ in range(f.width):
                out.append(f"got{n} {f.type}")
                n += 1
        return out[:-1] if self.returns_error else out


def build_signature_view(decl: FunctionDeclaration) -> SignatureView:
    return SignatureView(decl)


def _param_type(f: Field) -> str:
    return f"[]{f.type}" if f.variadic else f.type
