"""
Template renderer — produce the launcher and bridge Go sources.

Both templates are rendered from the same GenerationContext with a
StrictUndefined Jinja environment, then handed to the toolchain's
formatter.  The two failure modes are kept apart:

    RenderError  — the context did not fit the template (our bug)
    FormatError  — the rendered text is not valid Go (template/data bug)
"""

from __future__ import annotations

import json
import logging

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError

from inception.adapters.base import Toolchain
from inception.core.errors import FormatError, RenderError
from inception.core.models.descriptor import GenerationContext, OptionValue

logger = logging.getLogger(__name__)

LAUNCHER_TEMPLATE = "launcher.go"
BRIDGE_TEMPLATE = "bridge.go"

# Name of the function the bridge file exports
EXPOSE_FUNC = "FFJSONExpose"

# First line of every bridge file; used to recognise leftovers
GENERATED_MARKER = "// Code generated by ffjson"


# ── Templates ───────────────────────────────────────────────────

_LAUNCHER_SOURCE = """\
// DO NOT EDIT!
// Code generated by ffjson <https://github.com/maxproc/ffjson>
// DO NOT EDIT!

package main

import (
	ffjsoninception {{ (library_import ~ "/inception") | go_string }}
	importedinceptionpackage {{ import_identity | go_string }}
)

func main() {
	i := ffjsoninception.NewInception({{ input_path | go_string }}, {{ package_name | go_string }}, {{ output_path | go_string }}, {{ reset_fields | go_bool }})
	i.AddMany(importedinceptionpackage.{{ expose_func }}())
	i.Execute()
}
"""

_BRIDGE_SOURCE = """\
// Code generated by ffjson <https://github.com/maxproc/ffjson>
//
// This should be automatically deleted by running 'ffjson',
// if leftover, please delete it.

package {{ package_name }}

import (
	ffjsonshared {{ (library_import ~ "/shared") | go_string }}
)

func {{ expose_func }}() []ffjsonshared.InceptionType {
	rv := make([]ffjsonshared.InceptionType, 0)
{% for td in type_descriptors %}
	rv = append(rv, ffjsonshared.InceptionType{Obj: {{ td.name }}{}, Options: {{ td.options | go_literal("ffjsonshared.StructOptions") }}})
{% endfor %}
	return rv
}
"""


# ── Go literal filters ──────────────────────────────────────────


def go_string(value: object) -> str:
    """Quote a value as a Go interpreted string literal."""
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    # JSON string escapes are a subset of Go's; non-ASCII stays as UTF-8
    # since Go rejects the surrogate pairs JSON would use for it
    return json.dumps(value, ensure_ascii=False)


def go_bool(value: object) -> str:
    if not isinstance(value, bool):
        raise TypeError(f"expected a bool, got {type(value).__name__}")
    return "true" if value else "false"


def go_value(value: OptionValue) -> str:
    if isinstance(value, bool):
        return go_bool(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return go_string(value)
    raise TypeError(f"unsupported option value {value!r} ({type(value).__name__})")


def go_literal(options: dict[str, OptionValue], type_name: str) -> str:
    """Render an options mapping as a Go composite literal, keys sorted."""
    fields = ", ".join(f"{key}: {go_value(options[key])}" for key in sorted(options))
    return f"{type_name}{{{fields}}}"


def _build_env() -> Environment:
    env = Environment(
        loader=DictLoader({
            LAUNCHER_TEMPLATE: _LAUNCHER_SOURCE,
            BRIDGE_TEMPLATE: _BRIDGE_SOURCE,
        }),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.filters["go_string"] = go_string
    env.filters["go_bool"] = go_bool
    env.filters["go_literal"] = go_literal
    return env


_JINJA = _build_env()


# ── Rendering ───────────────────────────────────────────────────


def render_text(template_name: str, context: GenerationContext) -> str:
    """Substitute ``context`` into a template, without formatting.

    Raises:
        RenderError: Unknown template, undefined variable or a value
            that has no Go literal form.
    """
    try:
        template = _JINJA.get_template(template_name)
        return template.render(expose_func=EXPOSE_FUNC, **dict(context))
    except (TemplateError, TypeError, ValueError) as e:
        raise RenderError(template_name, str(e)) from e


def render(template_name: str, context: GenerationContext, toolchain: Toolchain) -> bytes:
    """Render a template and canonicalize it with the toolchain's formatter.

    Returns:
        The formatted source as UTF-8 bytes.

    Raises:
        RenderError: Substitution failed.
        FormatError: The formatter rejected the rendered source.
    """
    text = render_text(template_name, context)

    result = toolchain.format_source(text)
    if result.failed:
        logger.debug("Rejected %s source:\n%s", template_name, text)
        raise FormatError(template_name, result.diagnostics)

    return result.stdout.encode("utf-8")
