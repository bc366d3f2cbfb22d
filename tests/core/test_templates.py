import pytest

from wit_scala.codegen.core.templates import (
    TemplateEngine,
    TemplateError,
    create_template_engine,
    indent_code,
)


@pytest.fixture
def engine() -> TemplateEngine:
    return create_template_engine()


# ###############
# Rendering
# ###############


def test_in_memory_template(engine):
    engine.add_template("greeting.j2", "Hello {{ name }}!\n")
    assert engine.template_exists("greeting.j2")
    assert engine.render_template("greeting.j2", {"name": "WIT"}) == "Hello WIT!\n"


def test_missing_template(engine):
    assert not engine.template_exists("absent.j2")
    with pytest.raises(TemplateError, match="absent.j2"):
        engine.render_template("absent.j2", {})


def test_undefined_variables_fail(engine):
    with pytest.raises(TemplateError):
        engine.render_string("{{ missing }}", {})


def test_block_tags_own_their_line(engine):
    source = "start\n{% for x in items %}\n- {{ x }}\n{% endfor %}\nend\n"
    assert engine.render_string(source, {"items": [1, 2]}) == "start\n- 1\n- 2\nend\n"


def test_output_is_not_escaped(engine):
    assert engine.render_string("{{ v }}", {"v": "a < b && c"}) == "a < b && c"


def test_case_filters(engine):
    rendered = engine.render_string(
        "{{ n | snake_case }} {{ n | camel_case }} {{ n | pascal_case }}",
        {"n": "http-server"},
    )
    assert rendered == "http_server httpServer HttpServer"


def test_template_directory(tmp_path):
    (tmp_path / "file.j2").write_text("{{ value }}")
    engine = TemplateEngine(tmp_path)
    assert engine.render_template("file.j2", {"value": 42}) == "42"


# ###############
# Indentation
# ###############


def test_indent_code_includes_first_line():
    assert indent_code("a\nb", 2) == "  a\n  b"


def test_indent_code_skips_blank_lines():
    assert indent_code("a\n\n  b\n", 2) == "  a\n\n    b\n"


def test_indent_filter(engine):
    assert engine.render_string("{{ v | indent(4) }}", {"v": "x\ny"}) == "    x\n    y"
