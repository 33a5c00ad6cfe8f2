"""Tests for the Edge Driver facade."""

import asyncio

import pytest
from selenium.common.exceptions import WebDriverException

from edge_webdriver import default_service
from edge_webdriver.browser.driver import Driver
from edge_webdriver.capabilities import Capabilities
from edge_webdriver.default_service import reset_default_service, set_default_service
from edge_webdriver.options import Options

from _utils import FakeService, FakeSession, install_fake_session

##
## We DO NOT want to use pytest-asyncio.
##

@pytest.fixture
def event_loop():
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield loop
    loop.close()


@pytest.fixture(autouse=True)
def isolated_default(monkeypatch):
    reset_default_service()
    monkeypatch.delenv("EDGEDRIVER_PORT", raising=False)
    monkeypatch.setenv("EDGEDRIVER_KILL_ON_EXIT", "0")
    yield
    reset_default_service()


class TestDriverConstruction:

    def test_starts_supplied_service_and_binds_session(self, monkeypatch):
        fake = install_fake_session(monkeypatch)
        service = FakeService(url="http://127.0.0.1:1234")

        driver = Driver(service=service)

        assert service.start_calls == 1
        assert driver.session is fake["session"]
        assert driver.get_session() is fake["session"]
        assert driver.service is service
        assert driver.executor == ("executor", "http://127.0.0.1:1234")
        assert driver.loop is None

    def test_default_capabilities(self, monkeypatch):
        fake = install_fake_session(monkeypatch)
        Driver(service=FakeService())

        _, caps = fake["calls"][0]
        assert caps == Capabilities.edge()

    def test_options_are_converted(self, monkeypatch):
        fake = install_fake_session(monkeypatch)
        Driver(Options().set_page_load_strategy("EAGER"), FakeService())

        _, caps = fake["calls"][0]
        assert caps["pageLoadStrategy"] == "eager"
        assert caps["browserName"] == "MicrosoftEdge"

    def test_capabilities_are_used_as_is(self, monkeypatch):
        fake = install_fake_session(monkeypatch)
        caps = {"browserName": "MicrosoftEdge", "acceptInsecureCerts": True}
        Driver(caps, FakeService())

        assert fake["calls"][0][1] is caps

    def test_start_failure_propagates_without_session(self, monkeypatch):
        fake = install_fake_session(monkeypatch)
        service = FakeService()

        def failing_start(timeout=None):
            raise TimeoutError("Timed out waiting for the WebDriver server")

        service.start = failing_start
        with pytest.raises(TimeoutError):
            Driver(service=service)
        assert fake["calls"] == []

    def test_session_failure_propagates(self, monkeypatch):
        import edge_webdriver.browser.driver as driver_module

        install_fake_session(monkeypatch)

        def failing_session(executor, capabilities):
            raise WebDriverException("session not created")

        monkeypatch.setattr(driver_module, "create_session", failing_session)
        with pytest.raises(WebDriverException, match="session not created"):
            Driver(service=FakeService())


class TestDefaultServiceReuse:

    def test_drivers_share_one_default_service(self, monkeypatch):
        install_fake_session(monkeypatch)
        builds = []

        class Builder:
            def __init__(self, executable=None):
                pass

            def using_port(self, port):
                return self

            def build(self):
                service = FakeService()
                builds.append(service)
                return service

        monkeypatch.setattr(default_service, "ServiceBuilder", Builder)

        first = Driver()
        second = Driver()

        assert len(builds) == 1
        assert first.service is second.service is builds[0]
        assert builds[0].start_calls == 2

    def test_uses_explicitly_set_default(self, monkeypatch):
        install_fake_session(monkeypatch)
        service = FakeService()
        set_default_service(service)

        assert Driver().service is service


class TestDriverQuit:

    def test_quit_closes_session_then_kills_service(self, monkeypatch):
        order = []
        session = FakeSession()
        session.quit = lambda: order.append("session")
        install_fake_session(monkeypatch, session)
        service = FakeService()
        service.kill = lambda: order.append("service")

        Driver(service=service).quit()

        assert order == ["session", "service"]

    def test_service_killed_when_session_quit_fails(self, monkeypatch):
        install_fake_session(monkeypatch, FakeSession(quit_error=WebDriverException("gone")))
        service = FakeService()
        driver = Driver(service=service)

        with pytest.raises(WebDriverException, match="gone"):
            driver.quit()

        assert service.kill_calls == 1
        assert not service.is_running()

    def test_session_error_wins_over_kill_error(self, monkeypatch):
        install_fake_session(monkeypatch, FakeSession(quit_error=WebDriverException("gone")))
        service = FakeService(kill_error=OSError("kill failed"))
        driver = Driver(service=service)

        with pytest.raises(WebDriverException, match="gone"):
            driver.quit()
        assert service.kill_calls == 1

    def test_kill_error_surfaces_after_clean_quit(self, monkeypatch):
        fake = install_fake_session(monkeypatch)
        service = FakeService(kill_error=OSError("kill failed"))
        driver = Driver(service=service)

        with pytest.raises(OSError, match="kill failed"):
            driver.quit()
        assert fake["session"].quit_calls == 1

    def test_context_manager_quits(self, monkeypatch):
        fake = install_fake_session(monkeypatch)
        service = FakeService()

        with Driver(service=service) as driver:
            driver.get("https://example.org")

        assert fake["session"].visited == ["https://example.org"]
        assert fake["session"].quit_calls == 1
        assert service.kill_calls == 1

    def test_context_manager_keeps_body_error_when_quit_fails(self, monkeypatch, caplog):
        fake = install_fake_session(monkeypatch, FakeSession(quit_error=WebDriverException("gone")))
        service = FakeService()

        with pytest.raises(ValueError, match="body failed"):
            with Driver(service=service):
                raise ValueError("body failed")

        assert fake["session"].quit_calls == 1
        assert service.kill_calls == 1
        assert "Failed to quit Edge session after ValueError" in caplog.text

    def test_context_manager_surfaces_quit_error_after_clean_body(self, monkeypatch):
        install_fake_session(monkeypatch, FakeSession(quit_error=WebDriverException("gone")))

        with pytest.raises(WebDriverException, match="gone"):
            with Driver(service=FakeService()):
                pass


class TestDriverDelegation:

    def test_attributes_forwarded_to_session(self, monkeypatch):
        install_fake_session(monkeypatch)
        driver = Driver(service=FakeService())

        assert driver.title == "Fake Title"
        assert driver.session_id == "fake-session"

    def test_unknown_attribute_raises(self, monkeypatch):
        install_fake_session(monkeypatch)
        driver = Driver(service=FakeService())

        with pytest.raises(AttributeError):
            driver.does_not_exist

    def test_set_file_detector_is_noop(self, monkeypatch):
        fake = install_fake_session(monkeypatch)
        driver = Driver(service=FakeService())

        assert driver.set_file_detector(object()) is None
        assert not hasattr(fake["session"], "file_detector")


class TestDriverCreateAsync:

    def test_create_runs_pipeline_on_loop(self, monkeypatch, event_loop):
        fake = install_fake_session(monkeypatch)
        service = FakeService(url="http://127.0.0.1:4321")

        driver = event_loop.run_until_complete(
            Driver.create(Options().set_page_load_strategy("none"), service, loop=event_loop)
        )

        assert isinstance(driver, Driver)
        assert driver.loop is event_loop
        assert service.start_calls == 1
        assert driver.session is fake["session"]
        executor, caps = fake["calls"][0]
        assert executor == ("executor", "http://127.0.0.1:4321")
        assert caps["pageLoadStrategy"] == "none"

    def test_create_uses_running_loop_by_default(self, monkeypatch, event_loop):
        install_fake_session(monkeypatch)
        service = FakeService()
        set_default_service(service)

        async def main():
            driver = await Driver.create()
            return driver, asyncio.get_running_loop()

        driver, loop = event_loop.run_until_complete(main())
        assert driver.loop is loop
        assert driver.service is service

    def test_create_start_failure_skips_session(self, monkeypatch, event_loop):
        fake = install_fake_session(monkeypatch)
        service = FakeService()

        async def failing_start(timeout=None, loop=None):
            raise RuntimeError("Server terminated early with status 1")

        service.start_async = failing_start
        with pytest.raises(RuntimeError, match="terminated early"):
            event_loop.run_until_complete(Driver.create(service=service, loop=event_loop))
        assert fake["calls"] == []
