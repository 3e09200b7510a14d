"""Unit tests for SubscriptionRegistry."""

import pytest

from speckit_observability.adapters.console import RecordingConsoleSink
from speckit_observability.core.subscriptions import SubscriptionRegistry


@pytest.fixture
def registry(sink: RecordingConsoleSink) -> SubscriptionRegistry:
    return SubscriptionRegistry(sink, "Error in test observer")


class TestSubscribe:
    @pytest.mark.tra("Core.Subscriptions.Subscribe")
    @pytest.mark.tier(0)
    def test_observers_notified_in_registration_order(self, registry: SubscriptionRegistry) -> None:
        calls: list[tuple[str, int]] = []
        registry.subscribe(lambda v: calls.append(("first", v)))
        registry.subscribe(lambda v: calls.append(("second", v)))

        registry.notify(7)

        assert calls == [("first", 7), ("second", 7)]

    @pytest.mark.tra("Core.Subscriptions.Subscribe.NonCallable")
    @pytest.mark.tier(0)
    def test_subscribe_non_callable_raises_typeerror(self, registry: SubscriptionRegistry) -> None:
        with pytest.raises(TypeError, match="observer must be callable"):
            registry.subscribe("not a callable")  # type: ignore[arg-type]

    @pytest.mark.tra("Core.Subscriptions.Subscribe.SameCallableTwice")
    @pytest.mark.tier(0)
    def test_same_callable_twice_is_two_subscriptions(self, registry: SubscriptionRegistry) -> None:
        calls: list[int] = []
        first = registry.subscribe(calls.append)
        registry.subscribe(calls.append)

        first()
        registry.notify(1)

        assert calls == [1]
        assert len(registry) == 1


class TestUnsubscribe:
    @pytest.mark.tra("Core.Subscriptions.Unsubscribe.Independent")
    @pytest.mark.tier(0)
    def test_unsubscribe_only_removes_its_own_observer(self, registry: SubscriptionRegistry) -> None:
        a: list[int] = []
        b: list[int] = []
        unsubscribe_a = registry.subscribe(a.append)
        registry.subscribe(b.append)

        unsubscribe_a()
        registry.notify(1)

        assert a == []
        assert b == [1]

    @pytest.mark.tra("Core.Subscriptions.Unsubscribe.Idempotent")
    @pytest.mark.tier(0)
    def test_unsubscribe_twice_is_harmless(self, registry: SubscriptionRegistry) -> None:
        unsubscribe = registry.subscribe(lambda v: None)
        unsubscribe()
        unsubscribe()
        assert len(registry) == 0

    @pytest.mark.tra("Core.Subscriptions.Unsubscribe.DuringNotify")
    @pytest.mark.tier(0)
    def test_unsubscribe_during_notification(self, registry: SubscriptionRegistry) -> None:
        """Observers registered at notification start all run once."""
        calls: list[str] = []
        handles = {}

        def remover(value: int) -> None:
            calls.append("remover")
            handles["other"]()

        handles["remover"] = registry.subscribe(remover)
        handles["other"] = registry.subscribe(lambda v: calls.append("other"))

        registry.notify(1)
        registry.notify(2)

        assert calls == ["remover", "other", "remover"]


class TestFaultIsolation:
    @pytest.mark.tra("Core.Subscriptions.Notify.Isolation")
    @pytest.mark.tier(0)
    def test_failing_observer_reported_and_skipped(
        self, registry: SubscriptionRegistry, sink: RecordingConsoleSink
    ) -> None:
        calls: list[int] = []

        def broken(value: int) -> None:
            raise ValueError("bad observer")

        registry.subscribe(broken)
        registry.subscribe(calls.append)
        registry.notify(3)

        assert calls == [3]
        assert sink.lines == [("error", "Error in test observer: ValueError('bad observer')")]
