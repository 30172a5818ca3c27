"""templates.py - render Go test code from jinja templates.

two templates per run: a header (package clause + imports), rendered
only when starting from an empty buffer, and a test template rendered
once per function. both see the same small helper registry:

    ast(x)          source text of a type, import spec or field
    join(xs, sep)   join a sequence
    params(f)       ['a int', 'nums []int', ...]
    results(f)      ['got1 int', ...] without a trailing error
    receiver(f)     'Reader.' for methods, '' otherwise
    want(name)      got1 -> want1, 'got1 int' -> 'want1 int'

the test template sees `func` (a SignatureView) and `comment`.
caller-supplied templates run in a sandbox with strict undefineds,
so a typo fails the run instead of rendering an empty string.

in the world: templates are molds. pour the signature in, a test comes out.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from jinja2 import StrictUndefined, Template, TemplateSyntaxError
from jinja2.sandbox import SandboxedEnvironment

from gostub.errors import InvalidTemplateError, ParseError, TemplateError
from gostub.gen.parser import Field, ImportSpec, parse_source
from gostub.gen.signature import SignatureView, build_signature_view

_GOT_RE = re.compile(r"^got")


# ============================================================
# HELPERS
# ============================================================

def _ast(node) -> str:
    if isinstance(node, ImportSpec):
        return f"{node.name} {node.path}" if node.name else node.path
    if isinstance(node, Field):
        names = ", ".join(node.names)
        return f"{names} {node.source_type}" if names else node.source_type
    if isinstance(node, str):
        return node
    raise TypeError(f"ast: can't render {type(node).__name__}")


def _join(items: Iterable, sep: str = "") -> str:
    return sep.join(str(i) for i in items)


def _params(f: SignatureView) -> list[str]:
    return f.params


def _results(f: SignatureView) -> list[str]:
    return f.results


def _receiver(f: SignatureView) -> str:
    return f"{f.receiver_name}." if f.is_method else ""


def _want(name: str) -> str:
    return _GOT_RE.sub("want", name, count=1)


def helpers() -> dict[str, Callable]:
    """a fresh helper registry, keyed by the name templates call it by."""
    return {
        "ast": _ast,
        "join": _join,
        "params": _params,
        "results": _results,
        "receiver": _receiver,
        "want": _want,
    }


# ============================================================
# BUILT-IN TEMPLATES
# ============================================================

HEADER_TEMPLATE = '''\
package {{ package }}

import(
	"testing"
	"reflect"
{% for imp in imports %}
	{{ ast(imp) }}
{% endfor %}
)
'''

TEST_TEMPLATE = '''\

func {{ func.test_name }}(t *testing.T) {
{% if func.params %}
	type args struct {
{% for p in params(func) %}
		{{ p }}
{% endfor %}
	}

{% endif %}
	tests := []struct {
		name string
{% if func.is_method %}
		init    func(t *testing.T) {{ func.receiver_type }}
		inspect func(r {{ func.receiver_type }}, t *testing.T) //inspects receiver after test run
{% endif %}
{% if func.params %}

		args func(t *testing.T) args
{% endif %}
{% if results(func) or func.returns_error %}

{% endif %}
{% for r in results(func) %}
		{{ want(r) }}
{% endfor %}
{% if func.returns_error %}
		wantErr    bool
		inspectErr func(err error, t *testing.T) //use for more precise error evaluation after test
{% endif %}
	}{
		{
			//{{ comment }}
		},
	}

	for _, tt := range tests {
		t.Run(tt.name, func(t *testing.T) {
{% if func.params %}
			tArgs := tt.args(t)

{% endif %}
{% if func.is_method %}
			receiver := tt.init(t)
{% endif %}
			{{ (join(func.result_names, ", ") ~ " := ") if func.result_names else "" }}{{ "receiver." if func.is_method else "" }}{{ func.name }}({% for a in func.param_names %}tArgs.{{ a }}{{ ", " if not loop.last else "" }}{% endfor %})

{% if func.is_method %}
			if tt.inspect != nil {
				tt.inspect(receiver, t)
			}

{% endif %}
{% for r in func.non_error_result_names %}
			if !reflect.DeepEqual({{ r }}, tt.{{ want(r) }}) {
				t.Errorf("{{ receiver(func) }}{{ func.name }} {{ r }} = %v, {{ want(r) }}: %v", {{ r }}, tt.{{ want(r) }})
			}

{% endfor %}
{% if func.returns_error %}
			if (err != nil) != tt.wantErr {
				t.Fatalf("{{ receiver(func) }}{{ func.name }} error = %v, wantErr: %t", err, tt.wantErr)
			}

			if tt.inspectErr != nil {
				tt.inspectErr(err, t)
			}
{% endif %}
		})
	}
}
'''


# ============================================================
# RENDERING
# ============================================================

def _environment(registry: dict[str, Callable]) -> SandboxedEnvironment:
    env = SandboxedEnvironment(
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.globals.update(registry)
    env.filters.update(registry)
    return env


def compile_template(content: str, name: str = "test",
                     registry: dict[str, Callable] | None = None) -> Template:
    """compile template text. syntax errors raise InvalidTemplateError."""
    env = _environment(registry if registry is not None else helpers())
    try:
        return env.from_string(content)
    except TemplateSyntaxError as e:
        raise InvalidTemplateError(f"{name}:{e.lineno}: {e.message}") from e


@dataclass
class Renderer:
    """compiled header and test templates sharing one helper registry."""
    header_template: Template
    test_template: Template

    @classmethod
    def create(cls, test_template: str | None = None,
               header_template: str | None = None) -> "Renderer":
        registry = helpers()
        return cls(
            header_template=compile_template(header_template or HEADER_TEMPLATE, "header", registry),
            test_template=compile_template(test_template or TEST_TEMPLATE, "test", registry),
        )

    def header(self, package: str, imports: Iterable[ImportSpec]) -> str:
        try:
            return self.header_template.render(package=package, imports=list(imports))
        except Exception as e:
            raise TemplateError(_describe(e), stage="header") from e

    def test(self, view: SignatureView, comment: str = "") -> str:
        try:
            return self.test_template.render(func=view, comment=comment)
        except Exception as e:
            raise TemplateError(f"{view.name}: {_describe(e)}", stage="test") from e


def render_header(package: str, imports: Iterable[ImportSpec],
                  template: str | None = None) -> str:
    return Renderer.create(header_template=template).header(package, imports)


def render_test(view: SignatureView, comment: str = "", template: str | None = None) -> str:
    return Renderer.create(test_template=template).test(view, comment)


def _describe(e: Exception) -> str:
    return f"{type(e).__name__}: {e}"


# ============================================================
# VALIDATION
# ============================================================

SAMPLE_SOURCE = '''\
package funcs

func function() int {
	return 0
}
'''


def check_template(content: str, normalize: Callable[[str, str], str] | None = None) -> str:
    """render a test template against a sample function and make sure
    the result is Go that parses (and survives the normalizer, if given).
    returns the rendered sample."""
    tree = parse_source(SAMPLE_SOURCE, "funcs.go")
    renderer = Renderer.create(test_template=content)

    parts = [renderer.header(tree.package, tree.imports)]
    for decl in tree.declarations:
        parts.append(renderer.test(build_signature_view(decl), "sample"))
    rendered = "".join(parts)

    try:
        parse_source(rendered, "funcs_test.go")
    except ParseError as e:
        raise InvalidTemplateError(f"template produces invalid .go file\n{e}\n{rendered}") from e

    if normalize is not None:
        normalize("funcs_test.go", rendered)
    return rendered
