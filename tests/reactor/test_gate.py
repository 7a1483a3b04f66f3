from pathlib import Path

from diffcov.reactor.gate import is_last_module
from diffcov.reactor.types import BuildSession, Module
from hypothesis import given
from hypothesis import strategies as st


def _module(mid: str) -> Module:
    return Module(id=mid, output_dir=Path(f"/build/{mid}/classes"), base_dir=Path(f"/build/{mid}"))


def _reactor(*ids: str) -> tuple[Module, ...]:
    return tuple(_module(i) for i in ids)


def test_last_module_fires():
    modules = _reactor("core", "api", "app")
    assert is_last_module(modules, "app") is True


def test_other_modules_do_not_fire():
    modules = _reactor("core", "api", "app")
    assert is_last_module(modules, "core") is False
    assert is_last_module(modules, "api") is False


def test_comparison_is_case_insensitive():
    modules = _reactor("core", "Web-App")
    assert is_last_module(modules, "web-app") is True
    assert is_last_module(modules, "WEB-APP") is True


def test_single_module_build_fires_for_itself():
    assert is_last_module(_reactor("only"), "only") is True


def test_empty_ordering_never_fires():
    assert is_last_module((), "anything") is False


def test_unknown_module_does_not_fire():
    assert is_last_module(_reactor("a", "b"), "c") is False


_ids = st.text(alphabet="abcdefghijklmnopqrstuvwxyz-_0123456789", min_size=1, max_size=12)


@given(st.lists(_ids, min_size=1, max_size=8, unique=True))
def test_exactly_one_module_fires(ids):
    modules = _reactor(*ids)
    fired = [i for i in ids if is_last_module(modules, i)]
    assert fired == [ids[-1]]


@given(st.lists(_ids, min_size=1, max_size=8, unique=True))
def test_last_module_fires_in_any_case(ids):
    modules = _reactor(*ids)
    assert is_last_module(modules, ids[-1].upper())


def test_session_current_module_lookup():
    session = BuildSession(root_dir=Path("/build"), modules=_reactor("core", "app"), current_module_id="CORE")
    current = session.current_module()
    assert current is not None
    assert current.id == "core"
    assert session.module_ids() == ("core", "app")


def test_session_current_module_missing():
    session = BuildSession(root_dir=Path("/build"), modules=_reactor("core"), current_module_id="ghost")
    assert session.current_module() is None
