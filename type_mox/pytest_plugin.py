"""Pytest plugin providing the ``type_mox`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .proxy import mock_type
from .resolver import AmbiguityPolicy

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import TypeDescriptor
    from .registry import TypeMock

logger = logging.getLogger(__name__)

T = t.TypeVar("T")

_POLICY_CHOICES: tuple[str, ...] = tuple(policy.value for policy in AmbiguityPolicy)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("type_mox")
    group.addoption(
        "--type-mox-ambiguity",
        action="store",
        dest="type_mox_ambiguity",
        default=None,
        choices=_POLICY_CHOICES,
        help=(
            "How mocks resolve an overloaded method name given without "
            "argument types. Overrides the pytest.ini setting."
        ),
    )
    parser.addini(
        "type_mox_ambiguity",
        (
            "Default overload policy for type_mox mocks: "
            + ", ".join(_POLICY_CHOICES)
        ),
        default=AmbiguityPolicy.PREFER_NO_ARGS.value,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "type_mox(ambiguity: str = 'prefer-no-args'): override the overload "
            "policy of the type_mox fixture for a single test."
        ),
    )


class MockFactory:
    """Create mocks for a single test and reset them at teardown."""

    def __init__(self, ambiguity: AmbiguityPolicy) -> None:
        self.ambiguity = ambiguity
        self.mocks: list[TypeMock[t.Any]] = []

    def __call__(
        self,
        mocked_type: type[T] | TypeDescriptor,
        *,
        ambiguity: AmbiguityPolicy | str | None = None,
    ) -> TypeMock[T]:
        """Return a bound :class:`TypeMock` for *mocked_type*."""
        policy = self.ambiguity if ambiguity is None else AmbiguityPolicy(ambiguity)
        registry = mock_type(mocked_type, ambiguity=policy)
        self.mocks.append(registry)
        return registry

    def reset_all(self) -> None:
        """Reset every mock created by this factory."""
        for registry in self.mocks:
            registry.reset()
        self.mocks.clear()


def _ambiguity_setting(request: pytest.FixtureRequest) -> AmbiguityPolicy:
    """Return the overload policy configured for the requesting test."""
    # Priority order: marker > CLI option > INI setting
    marker = request.node.get_closest_marker("type_mox")
    if marker is not None and "ambiguity" in marker.kwargs:
        return _parse_policy(marker.kwargs["ambiguity"], "type_mox marker")

    config = request.config
    cli_value = config.getoption("type_mox_ambiguity")
    if cli_value is not None:
        return _parse_policy(cli_value, "--type-mox-ambiguity")

    return _parse_policy(config.getini("type_mox_ambiguity"), "type_mox_ambiguity")


def _parse_policy(value: object, source: str) -> AmbiguityPolicy:
    try:
        return AmbiguityPolicy(str(value).strip())
    except ValueError:
        msg = (
            f"{source}: invalid overload policy {value!r}; "
            f"expected one of {', '.join(_POLICY_CHOICES)}"
        )
        raise pytest.UsageError(msg) from None


@pytest.fixture
def type_mox(request: pytest.FixtureRequest) -> t.Generator[MockFactory, None, None]:
    """Provide a :class:`MockFactory`; its mocks are reset after the test."""
    factory = MockFactory(_ambiguity_setting(request))
    try:
        yield factory
    finally:
        try:
            factory.reset_all()
        except Exception:
            logger.exception("Error during type_mox fixture cleanup")
            pytest.fail("type_mox fixture cleanup failed")
