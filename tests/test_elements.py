"""Tests for the polling element resolver."""

import logging

import pytest
from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)

from testing_driver.actions.elements import ElementResolver, WaitBudget, locate_once, wait_clickable_element
from _utils import FakeClock, FakeDriver, FakeElement, appearing_after


XPATH = "//button[@id='save']"


def make_resolver(timeout=1.0, poll=0.25, before=None):
    clock = FakeClock()
    resolver = ElementResolver(timeout, before_resolve=before, clock=clock, sleep=clock.sleep, poll_interval=poll)
    return resolver, clock


class TestLocateOnce:

    def test_returns_first_match(self):
        first, second = FakeElement(name="first"), FakeElement(name="second")
        driver = FakeDriver({XPATH: [first, second]})
        assert locate_once(driver, XPATH) is first

    def test_returns_none_when_nothing_matches(self):
        assert locate_once(FakeDriver(), XPATH) is None

    def test_js_command_picks_from_candidates(self):
        first, second = FakeElement(name="first"), FakeElement(name="second")
        driver = FakeDriver({XPATH: [first, second]})
        driver.script_result = lambda candidates: candidates[1]

        assert locate_once(driver, XPATH, "return arguments[0][1];") is second
        script, args = driver.scripts[-1]
        assert script == "return arguments[0][1];"
        assert args == ([first, second],)


class TestElementResolver:

    def test_found_immediately_does_not_sleep(self):
        element = FakeElement()
        resolver, clock = make_resolver()
        driver = FakeDriver({XPATH: [element]})

        assert resolver.resolve(driver, XPATH) is element
        assert driver.lookups[XPATH] == 1
        assert clock.sleeps == []

    def test_found_after_a_few_polls(self):
        element = FakeElement()
        resolver, clock = make_resolver(timeout=5.0)
        driver = FakeDriver({XPATH: appearing_after(2, [element])})

        assert resolver.resolve(driver, XPATH) is element
        assert driver.lookups[XPATH] == 3
        assert clock.now == pytest.approx(0.5)

    def test_time_budget_exhausted_returns_none(self):
        resolver, clock = make_resolver(timeout=1.0, poll=0.25)
        driver = FakeDriver()

        assert resolver.resolve(driver, XPATH) is None
        # lookups at t=0, 0.25, 0.5, 0.75; no sleep once the budget is spent
        assert driver.lookups[XPATH] == 4
        assert clock.now == pytest.approx(1.0)

    def test_attempt_budget_ignores_elapsed_time(self):
        resolver, clock = make_resolver(timeout=0.0, poll=0.25)
        driver = FakeDriver()

        assert resolver.resolve(driver, XPATH, budget=WaitBudget(timeout=0.0, attempts=3)) is None
        assert driver.lookups[XPATH] == 3
        assert len(clock.sleeps) == 2

    def test_before_resolve_runs_once_per_resolution(self):
        calls = []
        resolver, _ = make_resolver(before=lambda: calls.append(1))
        resolver.resolve(FakeDriver(), XPATH)
        assert calls == [1]

    def test_transient_errors_are_retried_silently(self, caplog):
        element = FakeElement()
        outcomes = [StaleElementReferenceException("stale"), NoSuchElementException("missing")]

        def _source():
            if outcomes:
                raise outcomes.pop(0)
            return [element]

        resolver, _ = make_resolver()
        driver = FakeDriver({XPATH: _source})

        with caplog.at_level(logging.ERROR, logger="testing_driver.actions.elements"):
            assert resolver.resolve(driver, XPATH) is element
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

    def test_unexpected_error_logged_once_per_resolution(self, caplog):
        resolver, _ = make_resolver(timeout=1.0, poll=0.25)
        driver = FakeDriver({XPATH: WebDriverException("invalid selector")})

        with caplog.at_level(logging.ERROR, logger="testing_driver.actions.elements"):
            assert resolver.resolve(driver, XPATH) is None

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "invalid selector" in errors[0].getMessage()
        assert driver.lookups[XPATH] == 4

    def test_default_budget_follows_timeout(self):
        resolver, _ = make_resolver(timeout=3.0)
        resolver.timeout = 7.0
        assert resolver.default_budget() == WaitBudget(timeout=7.0)


class TestWaitClickableElement:

    def test_returns_element_when_displayed_and_enabled(self):
        element = FakeElement()
        driver = FakeDriver({XPATH: [element]})
        assert wait_clickable_element(driver, XPATH, 0.5) is element

    def test_times_out_when_disabled(self):
        driver = FakeDriver({XPATH: [FakeElement(enabled=False)]})
        with pytest.raises(TimeoutException):
            wait_clickable_element(driver, XPATH, 0.2)

    def test_stale_reference_is_replaced_by_a_fresh_lookup(self):
        fresh = FakeElement(name="fresh")
        driver = FakeDriver()
        driver.elements[XPATH] = lambda: [FakeElement(stale=True)] if driver.lookups[XPATH] == 1 else [fresh]

        assert wait_clickable_element(driver, XPATH, 1.0) is fresh
        assert driver.lookups[XPATH] == 2

    def test_honours_js_command(self):
        hidden, shown = FakeElement(displayed=False), FakeElement(name="shown")
        driver = FakeDriver({XPATH: [hidden, shown]})
        driver.script_result = lambda candidates: candidates[1]
        assert wait_clickable_element(driver, XPATH, 0.5, "return arguments[0][1];") is shown
