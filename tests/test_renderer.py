"""
Tests for the launcher / bridge templates and the formatting pass.
"""

import pytest

from inception.adapters.mock import MockToolchain
from inception.core.errors import FormatError, RenderError
from inception.core.models.descriptor import GenerationContext, TypeDescriptor
from inception.core.services.renderer import (
    BRIDGE_TEMPLATE,
    GENERATED_MARKER,
    LAUNCHER_TEMPLATE,
    go_literal,
    go_string,
    render,
    render_text,
)


@pytest.fixture
def context(descriptors) -> GenerationContext:
    return GenerationContext(
        type_descriptors=tuple(descriptors),
        import_identity="example.com/models",
        package_name="models",
        input_path="/src/models/user.go",
        output_path="/src/models/user_ffjson.go",
        reset_fields=False,
    )


# ── Go literal filters ───────────────────────────────────────────────


class TestGoLiterals:
    def test_go_string_escapes(self):
        assert go_string('C:\\dir\\"x".go') == '"C:\\\\dir\\\\\\"x\\".go"'

    def test_go_string_keeps_non_ascii(self):
        assert go_string("/home/zoë/😀/user.go") == '"/home/zoë/😀/user.go"'

    def test_go_string_escapes_control_characters(self):
        assert go_string("a\x01\n") == '"a\\u0001\\n"'

    def test_non_bmp_path_in_launcher(self, context):
        ctx = context.model_copy(update={"output_path": "/src/😀/user_ffjson.go"})
        text = render_text(LAUNCHER_TEMPLATE, ctx)
        assert '"/src/😀/user_ffjson.go"' in text
        assert "\\ud83d" not in text

    def test_go_string_rejects_non_strings(self):
        with pytest.raises(TypeError):
            go_string(3)

    def test_literal_keys_sorted(self):
        literal = go_literal({"SkipEncoder": True, "SkipDecoder": False}, "opts.T")
        assert literal == "opts.T{SkipDecoder: false, SkipEncoder: true}"

    def test_literal_scalar_kinds(self):
        literal = go_literal({"A": 3, "B": "x", "C": True}, "T")
        assert literal == 'T{A: 3, B: "x", C: true}'

    def test_empty_literal(self):
        assert go_literal({}, "T") == "T{}"

    def test_unsupported_value(self):
        with pytest.raises(TypeError):
            go_literal({"A": 1.5}, "T")


# ── Launcher ─────────────────────────────────────────────────────────


class TestLauncherTemplate:
    def test_main_package(self, context):
        text = render_text(LAUNCHER_TEMPLATE, context)
        assert "package main" in text

    def test_imports(self, context):
        text = render_text(LAUNCHER_TEMPLATE, context)
        assert 'ffjsoninception "github.com/maxproc/ffjson/inception"' in text
        assert 'importedinceptionpackage "example.com/models"' in text

    def test_new_inception_arguments(self, context):
        text = render_text(LAUNCHER_TEMPLATE, context)
        assert (
            'ffjsoninception.NewInception("/src/models/user.go", "models", '
            '"/src/models/user_ffjson.go", false)'
        ) in text

    def test_reset_fields_flag(self, context):
        text = render_text(LAUNCHER_TEMPLATE, context.model_copy(update={"reset_fields": True}))
        assert '"/src/models/user_ffjson.go", true)' in text

    def test_registers_and_executes(self, context):
        text = render_text(LAUNCHER_TEMPLATE, context)
        add = text.index("i.AddMany(importedinceptionpackage.FFJSONExpose())")
        execute = text.index("i.Execute()")
        assert add < execute

    def test_custom_library(self, context):
        ctx = context.model_copy(update={"library_import": "example.org/fork/ffjson"})
        text = render_text(LAUNCHER_TEMPLATE, ctx)
        assert '"example.org/fork/ffjson/inception"' in text


# ── Bridge ───────────────────────────────────────────────────────────


class TestBridgeTemplate:
    def test_header_and_package(self, context):
        text = render_text(BRIDGE_TEMPLATE, context)
        assert text.startswith(GENERATED_MARKER)
        assert "package models" in text
        assert 'ffjsonshared "github.com/maxproc/ffjson/shared"' in text

    def test_header_credits_library(self, context):
        header = "// Code generated by ffjson <https://github.com/maxproc/ffjson>"
        for name in (LAUNCHER_TEMPLATE, BRIDGE_TEMPLATE):
            assert header in render_text(name, context).splitlines()

    def test_exposes_every_type_in_order(self, context):
        text = render_text(BRIDGE_TEMPLATE, context)
        assert "func FFJSONExpose() []ffjsonshared.InceptionType {" in text
        a = text.index(
            "ffjsonshared.InceptionType{Obj: A{}, Options: ffjsonshared.StructOptions{X: true}}"
        )
        b = text.index(
            "ffjsonshared.InceptionType{Obj: B{}, Options: ffjsonshared.StructOptions{X: false}}"
        )
        assert a < b
        assert text.count("rv = append(") == 2

    def test_no_types(self, context):
        text = render_text(BRIDGE_TEMPLATE, context.model_copy(update={"type_descriptors": ()}))
        assert "rv = append(" not in text
        assert "return rv" in text

    def test_no_template_lines_left(self, context):
        text = render_text(BRIDGE_TEMPLATE, context)
        assert "{%" not in text
        assert "{{" not in text


# ── render(): substitution + formatting ──────────────────────────────


class TestRender:
    def test_returns_formatted_bytes(self, context, mock_toolchain):
        out = render(BRIDGE_TEMPLATE, context, mock_toolchain)
        assert isinstance(out, bytes)
        assert out.decode("utf-8") == render_text(BRIDGE_TEMPLATE, context)

    def test_formatter_receives_rendered_text(self, context, mock_toolchain):
        render(LAUNCHER_TEMPLATE, context, mock_toolchain)
        assert mock_toolchain.calls("format") == [render_text(LAUNCHER_TEMPLATE, context)]

    def test_deterministic(self, context, mock_toolchain):
        first = render(BRIDGE_TEMPLATE, context, mock_toolchain)
        second = render(BRIDGE_TEMPLATE, context, mock_toolchain)
        assert first == second

    def test_format_failure_is_format_error(self, context):
        toolchain = MockToolchain()
        toolchain.set_format_failure("<standard input>:9:3: expected '}', found 'EOF'")
        with pytest.raises(FormatError) as exc_info:
            render(BRIDGE_TEMPLATE, context, toolchain)
        assert "expected '}'" in str(exc_info.value)
        assert exc_info.value.template_name == BRIDGE_TEMPLATE

    def test_unknown_template_is_render_error(self, context, mock_toolchain):
        with pytest.raises(RenderError):
            render("nope.go", context, mock_toolchain)
        assert mock_toolchain.calls("format") == []

    def test_bad_option_value_is_render_error(self, context, mock_toolchain):
        bad = TypeDescriptor.model_construct(name="A", options={"X": 1.5})
        ctx = context.model_copy(update={"type_descriptors": (bad,)})
        with pytest.raises(RenderError) as exc_info:
            render(BRIDGE_TEMPLATE, ctx, mock_toolchain)
        assert not isinstance(exc_info.value, FormatError)
