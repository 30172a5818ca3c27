"""store.py - installed test templates.

templates live as JSON under <home>/templates/, one file per template.
the selected one is the "template" key of <home>/config.json. the
built-in template is always there, named "default", and can't be
replaced or removed.

in the world: the shelf of molds. pick one, it stays picked.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from gostub.config import load_global, set_global_value
from gostub.errors import TemplateNotFoundError, UsageError
from gostub.gen.templates import TEST_TEMPLATE, check_template
from gostub.io import read_json, write_json
from gostub.log import info
from gostub.paths import templates_dir

DEFAULT_TEMPLATE = "default"


@dataclass
class Template:
    """an installed test template."""
    name: str
    content: str
    source: str = ""  # file it was installed from


class TemplateStore:
    """templates under an explicit home directory."""

    def __init__(self, home: Path):
        self.home = Path(home)
        self.dir = templates_dir(self.home)

    def _path(self, name: str) -> Path:
        return self.dir / f"{name}.json"

    def names(self) -> list[str]:
        """the built-in first, then installed templates sorted by name."""
        installed = sorted(p.stem for p in self.dir.glob("*.json")) if self.dir.exists() else []
        return [DEFAULT_TEMPLATE] + [n for n in installed if n != DEFAULT_TEMPLATE]

    def current(self) -> str:
        """the selected template, or default if it's gone."""
        name = load_global(self.home).get("template", DEFAULT_TEMPLATE)
        return name if name in self.names() else DEFAULT_TEMPLATE

    def load(self, name: str) -> Template:
        if name == DEFAULT_TEMPLATE:
            return Template(name=DEFAULT_TEMPLATE, content=TEST_TEMPLATE)
        data = read_json(self._path(name))
        if not isinstance(data, dict) or "content" not in data:
            raise TemplateNotFoundError(name)
        return Template(name=name, content=data["content"], source=data.get("source", ""))

    def get(self, name: str | None = None) -> str:
        """template text by name, or the selected one."""
        return self.load(name or self.current()).content

    def add(self, filename: str, normalize: Callable[[str, str], str] | None = None) -> Template:
        """validate and install a template file under its stem name."""
        path = Path(filename)
        name = path.stem
        if name == DEFAULT_TEMPLATE:
            raise UsageError(f"can't replace the {DEFAULT_TEMPLATE} template")
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise UsageError(f"template file does not exist: {filename}") from e

        check_template(content, normalize)

        template = Template(name=name, content=content, source=str(path.resolve()))
        write_json(self._path(name), {
            "name": template.name,
            "content": template.content,
            "source": template.source,
        })
        info("store", f"installed template {name}")
        return template

    def use(self, name: str):
        if name not in self.names():
            raise TemplateNotFoundError(name)
        set_global_value("template", name, self.home)
        info("store", f"using template {name}")

    def remove(self, name: str):
        if name == DEFAULT_TEMPLATE:
            raise UsageError(f"can't remove the {DEFAULT_TEMPLATE} template")
        path = self._path(name)
        if not path.exists():
            raise TemplateNotFoundError(name)
        was_current = self.current() == name
        path.unlink()
        if was_current:
            set_global_value("template", DEFAULT_TEMPLATE, self.home)
        info("store", f"removed template {name}")
