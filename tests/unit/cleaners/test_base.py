"""Unit tests for junk target helpers."""

from diskord.cleaners.base import CleanResult, JunkTarget, clean_target, measure_until_stable


class _Readings:
    """Callable returning queued readings, repeating the last one."""

    def __init__(self, *values: int) -> None:
        self._values = list(values)
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        if len(self._values) > 1:
            return self._values.pop(0)
        return self._values[0]


class _Target(JunkTarget):
    def __init__(self, readings: _Readings, ok: bool = True) -> None:
        self._readings = readings
        self._ok = ok

    @property
    def id(self) -> str:
        return "fake"

    @property
    def name(self) -> str:
        return "Fake"

    def measure(self) -> int:
        return self._readings()

    def clean(self) -> bool:
        return self._ok


class TestMeasureUntilStable:
    """Tests for measure_until_stable."""

    def test_returns_once_two_readings_agree(self) -> None:
        """Measuring stops as soon as consecutive readings match."""
        readings = _Readings(300, 120, 40, 40, 0)
        delays: list[float] = []

        result = measure_until_stable(readings, attempts=10, interval=0.1, sleep=delays.append)

        assert result == 40
        assert readings.calls == 4
        assert delays == [0.1, 0.2, 0.4]

    def test_stable_immediately(self) -> None:
        """Already stable sizes need a single extra reading."""
        readings = _Readings(7)
        delays: list[float] = []

        assert measure_until_stable(readings, sleep=delays.append) == 7
        assert len(delays) == 1

    def test_gives_up_after_attempts(self) -> None:
        """The last reading is returned when sizes never settle."""
        readings = _Readings(5, 4, 3, 2, 1, 0)
        delays: list[float] = []

        result = measure_until_stable(readings, attempts=3, interval=1.0, sleep=delays.append)

        assert result == 3
        assert readings.calls == 3
        assert delays == [1.0, 2.0]

    def test_single_attempt_does_not_sleep(self) -> None:
        """With one attempt the first reading is final."""
        delays: list[float] = []

        assert measure_until_stable(_Readings(9, 1), attempts=1, sleep=delays.append) == 9
        assert delays == []


class TestCleanTarget:
    """Tests for clean_target."""

    def test_reports_freed_bytes(self) -> None:
        """Sizes before and after cleaning are recorded."""
        target = _Target(_Readings(1000, 10, 10))

        result = clean_target(target, sleep=lambda _: None)

        assert result == CleanResult(
            target_id="fake", success=True, size_before=1000, size_after=10
        )
        assert result.freed_bytes == 990

    def test_failed_clean(self) -> None:
        """A failing cleaner is reported and still re-measured."""
        target = _Target(_Readings(50), ok=False)

        result = clean_target(target, sleep=lambda _: None)

        assert result.success is False
        assert result.freed_bytes == 0

    def test_freed_never_negative(self) -> None:
        """Growth during cleaning does not produce negative savings."""
        assert CleanResult("x", True, size_before=5, size_after=9).freed_bytes == 0

    def test_defaults(self) -> None:
        """Targets default to the system tab without elevation."""
        target = _Target(_Readings(0))

        assert target.category == "system"
        assert target.requires_privilege is False
        assert target.is_available() is True
