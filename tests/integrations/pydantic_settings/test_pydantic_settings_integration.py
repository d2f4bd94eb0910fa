from __future__ import annotations

from typing import Any

import pytest
from pydantic_settings import BaseSettings

from dinano import Registry
from dinano.exceptions import DINanoFrozenDependencyError, DINanoInvalidTypeError
from dinano.integrations.pydantic_settings import is_pydantic_settings_subclass, register_settings


class AppSettings(BaseSettings):
    port: int = 8080
    offset: float = 0.5


class Server:
    def __init__(self, conf: Any) -> None:
        self.port = conf.port


def test_settings_classes_are_recognised() -> None:
    assert is_pydantic_settings_subclass(AppSettings)
    assert not is_pydantic_settings_subclass(Server)
    assert not is_pydantic_settings_subclass(AppSettings())


@pytest.mark.asyncio
async def test_register_settings_loads_environment_at_build_time(
    monkeypatch: pytest.MonkeyPatch,
    registry: Registry,
) -> None:
    register_settings(registry, AppSettings, "conf")
    registry.register_all({"server": Server})
    monkeypatch.setenv("PORT", "9090")

    modules = await registry.invoke()

    assert modules["server"].port == 9090
    assert isinstance(modules["conf"], AppSettings)
    with pytest.raises(DINanoFrozenDependencyError):
        modules["conf"].port = 1


@pytest.mark.asyncio
async def test_register_settings_as_mock_keeps_fields_mutable(registry: Registry) -> None:
    register_settings(registry, AppSettings, "conf", mock=True)

    modules = await registry.invoke()
    modules["conf"].offset = 0.9

    assert modules["conf"].offset == 0.9


def test_register_settings_rejects_other_classes(registry: Registry) -> None:
    with pytest.raises(DINanoInvalidTypeError) as exc_info:
        register_settings(registry, Server, "conf")

    assert exc_info.value.type_name == "Server"
    assert "conf" not in registry
