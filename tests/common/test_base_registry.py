from __future__ import annotations

import pytest

from common.base_registry import BaseRegistry


def test_register_and_get_with_normalization() -> None:
    reg = BaseRegistry()

    @reg.register(None)
    def clifford_torus():  # noqa: ANN001 - テスト用
        return 1

    assert reg.is_registered("clifford-torus")
    assert reg.get("CliffordTorus") is clifford_torus
    assert reg.get("Clifford-Torus") is clifford_torus
    assert "clifford_torus" in reg.list_all()


def test_duplicate_and_unregister() -> None:
    reg = BaseRegistry()

    @reg.register(None)
    def sample():  # noqa: ANN001 - テスト用
        return 1

    # 同一オブジェクトの再登録は許可
    reg.register("sample")(sample)
    with pytest.raises(ValueError):
        reg.register("sample")(lambda: 2)

    reg.unregister("Sample")
    assert not reg.is_registered("sample")
    reg.unregister("nonexistent")  # 例外にならない


def test_key_normalization_collapses_underscores() -> None:
    reg = BaseRegistry()

    @reg.register("My-Effect")
    def fn():  # noqa: ANN001 - テスト用
        return 0

    assert BaseRegistry.normalize_key("My-Effect") == "my_effect"
    assert reg.get("my_effect") is fn


@pytest.mark.parametrize("bad, exc", [("", ValueError), (None, TypeError), (3, TypeError)])
def test_invalid_keys(bad, exc) -> None:
    with pytest.raises(exc):
        BaseRegistry.normalize_key(bad)  # type: ignore[arg-type]


def test_container_protocol_and_copy() -> None:
    reg = BaseRegistry()
    reg.register("a")(len)
    reg.register("b")(abs)
    assert "a" in reg and "A" in reg
    assert "" not in reg and 3 not in reg
    assert list(reg) == ["a", "b"]
    assert len(reg) == 2
    snap = reg.registry
    snap.clear()
    assert len(reg) == 2
    with pytest.raises(KeyError):
        reg.get("c")
    reg.clear()
    assert len(reg) == 0
