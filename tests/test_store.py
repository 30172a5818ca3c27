"""tests for the installed template store."""

import pytest

from gostub.config import load_global
from gostub.errors import InvalidTemplateError, TemplateNotFoundError, UsageError
from gostub.gen.store import DEFAULT_TEMPLATE, TemplateStore
from gostub.gen.templates import TEST_TEMPLATE

CUSTOM = "\nfunc {{ func.test_name }}(t *testing.T) {\n\t//{{ comment }}\n}\n"


@pytest.fixture
def store(home):
    return TemplateStore(home)


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "short.tmpl"
    path.write_text(CUSTOM)
    return path


class TestTemplateStore:

    def test_fresh_store(self, store):
        assert store.names() == [DEFAULT_TEMPLATE]
        assert store.current() == DEFAULT_TEMPLATE
        assert store.get() == TEST_TEMPLATE

    def test_add(self, store, template_file):
        t = store.add(str(template_file))
        assert t.name == "short"
        assert t.source == str(template_file.resolve())
        assert store.names() == ["default", "short"]
        assert store.get("short") == CUSTOM

    def test_add_keeps_default_first(self, store, tmp_path):
        for name in ("zeta", "alpha"):
            (tmp_path / f"{name}.tmpl").write_text(CUSTOM)
            store.add(str(tmp_path / f"{name}.tmpl"))
        assert store.names() == ["default", "alpha", "zeta"]

    def test_add_invalid(self, store, tmp_path):
        path = tmp_path / "broken.tmpl"
        path.write_text("\nfunc {{ func.name }}( {\n")
        with pytest.raises(InvalidTemplateError):
            store.add(str(path))
        assert store.names() == [DEFAULT_TEMPLATE]

    def test_add_missing_file(self, store, tmp_path):
        with pytest.raises(UsageError, match="does not exist"):
            store.add(str(tmp_path / "nope.tmpl"))

    def test_cannot_replace_default(self, store, tmp_path):
        path = tmp_path / "default.tmpl"
        path.write_text(CUSTOM)
        with pytest.raises(UsageError):
            store.add(str(path))

    def test_add_with_normalizer(self, store, template_file):
        seen = []
        store.add(str(template_file), normalize=lambda name, text: seen.append(name) or text)
        assert seen == ["funcs_test.go"]

    def test_use(self, store, template_file, home):
        store.add(str(template_file))
        store.use("short")
        assert store.current() == "short"
        assert store.get() == CUSTOM
        assert load_global(home)["template"] == "short"

    def test_use_unknown(self, store):
        with pytest.raises(TemplateNotFoundError, match="template not found: nope"):
            store.use("nope")

    def test_load_unknown(self, store):
        with pytest.raises(TemplateNotFoundError):
            store.get("nope")

    def test_remove(self, store, template_file):
        store.add(str(template_file))
        store.remove("short")
        assert store.names() == [DEFAULT_TEMPLATE]

    def test_remove_current_resets_to_default(self, store, template_file, home):
        store.add(str(template_file))
        store.use("short")
        store.remove("short")
        assert store.current() == DEFAULT_TEMPLATE
        assert load_global(home)["template"] == DEFAULT_TEMPLATE

    def test_remove_default(self, store):
        with pytest.raises(UsageError):
            store.remove(DEFAULT_TEMPLATE)

    def test_remove_unknown(self, store):
        with pytest.raises(TemplateNotFoundError):
            store.remove("nope")

    def test_current_falls_back_when_file_is_gone(self, store, template_file):
        store.add(str(template_file))
        store.use("short")
        (store.dir / "short.json").unlink()
        assert store.current() == DEFAULT_TEMPLATE
