from pathlib import Path

import pytest
from diffcov.core.errors import ConfigLoadError
from diffcov.reactor.loader import DefaultReactorLoader, find_reactor_file


def write_yaml(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_modules_keep_reactor_order_and_defaults(tmp_path: Path):
    f = write_yaml(
        tmp_path / "reactor.yaml",
        """
modules:
  - id: core
  - id: app
    baseDir: services/app
""",
    )
    session = DefaultReactorLoader().load(f, current_module_id="app")

    root = tmp_path.resolve()
    assert session.root_dir == root
    assert session.module_ids() == ("core", "app")
    assert session.current_module_id == "app"

    core, app = session.modules
    assert core.base_dir == root / "core"
    assert core.output_dir == root / "core" / "target" / "classes"
    assert core.source_roots == (root / "core" / "src" / "main" / "java",)
    assert app.base_dir == root / "services" / "app"


def test_explicit_paths_and_root(tmp_path: Path):
    (tmp_path / "build").mkdir()
    f = write_yaml(
        tmp_path / "build" / "reactor.yaml",
        """
root: ..
modules:
  - id: lib
    baseDir: lib
    outputDir: out/classes
    sourceRoots: [src, /abs/generated]
""",
    )
    session = DefaultReactorLoader().load(f, current_module_id="lib")

    (lib,) = session.modules
    root = (tmp_path / "build").resolve() / ".."
    assert session.root_dir == root
    assert lib.output_dir == root / "lib" / "out" / "classes"
    assert lib.source_roots == (root / "lib" / "src", Path("/abs/generated"))


def test_single_source_root_string(tmp_path: Path):
    f = write_yaml(tmp_path / "reactor.yaml", "modules:\n  - id: a\n    sourceRoots: src\n")
    (a,) = DefaultReactorLoader().load(f, current_module_id="a").modules
    assert a.source_roots == (tmp_path.resolve() / "a" / "src",)


def test_duplicate_ids_rejected_case_insensitively(tmp_path: Path):
    f = write_yaml(tmp_path / "reactor.yaml", "modules:\n  - id: Core\n  - id: core\n")
    with pytest.raises(ConfigLoadError) as exc:
        DefaultReactorLoader().load(f, current_module_id="core")
    assert exc.value.code == "duplicate_module"


def test_empty_modules_rejected(tmp_path: Path):
    f = write_yaml(tmp_path / "reactor.yaml", "modules: []\n")
    with pytest.raises(ConfigLoadError) as exc:
        DefaultReactorLoader().load(f, current_module_id="x")
    assert exc.value.code == "invalid_modules"


def test_missing_id_rejected(tmp_path: Path):
    f = write_yaml(tmp_path / "reactor.yaml", "modules:\n  - baseDir: a\n")
    with pytest.raises(ConfigLoadError) as exc:
        DefaultReactorLoader().load(f, current_module_id="x")
    assert exc.value.code == "invalid_module"


def test_find_reactor_file(tmp_path: Path):
    assert find_reactor_file(tmp_path) is None
    f = write_yaml(tmp_path / "reactor.json", '{"modules": [{"id": "a"}]}')
    assert find_reactor_file(tmp_path) == f
