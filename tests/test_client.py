"""Unit tests for the client commands, with the SOAP client stubbed out."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import requests

import client

pytestmark = pytest.mark.unit


@pytest.fixture
def service(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Patch client.connect() to hand back a mock zeep client.

    Stubbed results follow what zeep hands back: request_code and list give
    objects with attributes, register (a single Integer) gives a bare int.
    """
    svc = MagicMock()
    monkeypatch.setattr(client, "connect", lambda host_port: SimpleNamespace(service=svc))
    return svc


def test_wsdl_url() -> None:
    assert client.wsdl_url("localhost:8000") == "http://localhost:8000/?wsdl"


class TestRegister:
    def test_success(self, service: MagicMock, capsys: pytest.CaptureFixture) -> None:
        service.request_code.return_value = SimpleNamespace(rc=0, add_code=7)
        service.register.return_value = 0

        assert client.register("h:1", "CS158A", 123456, "Alice") == 0

        service.request_code.assert_called_once_with("CS158A", 123456)
        service.register.assert_called_once_with(7, 123456, "Alice")
        assert capsys.readouterr().out == "registration successful\n"

    @pytest.mark.parametrize("rc", [1, 2])
    def test_code_request_rejected(
        self, service: MagicMock, capsys: pytest.CaptureFixture, rc: int
    ) -> None:
        service.request_code.return_value = SimpleNamespace(rc=rc, add_code=None)

        assert client.register("h:1", "CS999", 123456, "Alice") == rc

        service.register.assert_not_called()
        assert capsys.readouterr().out == f"problem getting add code: {rc}\n"

    def test_register_rejected(self, service: MagicMock, capsys: pytest.CaptureFixture) -> None:
        service.request_code.return_value = SimpleNamespace(rc=0, add_code=3)
        service.register.return_value = 2

        assert client.register("h:1", "CS158A", 123456, "Alice") == 2
        assert capsys.readouterr().out == "problem registering: 2\n"

    def test_transport_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        def refuse(host_port):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr(client, "connect", refuse)

        assert client.register("nowhere:9", "CS158A", 123456, "Alice") is None
        assert capsys.readouterr().out == "problem communicating with nowhere:9\n"

    def test_transport_error_between_calls(
        self, service: MagicMock, capsys: pytest.CaptureFixture
    ) -> None:
        service.request_code.return_value = SimpleNamespace(rc=0, add_code=3)
        service.register.side_effect = requests.exceptions.ReadTimeout("slow")

        assert client.register("h:1", "CS158A", 123456, "Alice") is None
        assert capsys.readouterr().out == "problem communicating with h:1\n"


class TestListStudents:
    def test_sorted_by_student_id(self, service: MagicMock, capsys: pytest.CaptureFixture) -> None:
        service.list.return_value = SimpleNamespace(
            rc=0,
            registrations=[
                SimpleNamespace(add_code=3, student_id=300000, name="Carol"),
                SimpleNamespace(add_code=5, student_id=100000, name="Alice"),
                SimpleNamespace(add_code=1, student_id=200000, name="Bob"),
            ],
        )

        assert client.list_students("h:1", "CS158A") == 0

        service.list.assert_called_once_with("CS158A")
        assert capsys.readouterr().out.splitlines() == [
            "5 100000 Alice",
            "1 200000 Bob",
            "3 300000 Carol",
        ]

    @pytest.mark.parametrize("registrations", [None, []])
    def test_empty_roster(
        self, service: MagicMock, capsys: pytest.CaptureFixture, registrations
    ) -> None:
        service.list.return_value = SimpleNamespace(rc=0, registrations=registrations)
        assert client.list_students("h:1", "CS158A") == 0
        assert capsys.readouterr().out == ""

    def test_invalid_course(self, service: MagicMock, capsys: pytest.CaptureFixture) -> None:
        service.list.return_value = SimpleNamespace(rc=1, registrations=[])
        assert client.list_students("h:1", "CS999") == 1
        assert capsys.readouterr().out == "problem listing students: 1\n"

    def test_transport_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        def refuse(host_port):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr(client, "connect", refuse)

        assert client.list_students("nowhere:9", "CS158A") is None
        assert capsys.readouterr().out == "problem communicating with nowhere:9\n"

    def test_empty_name_prints_blank(
        self, service: MagicMock, capsys: pytest.CaptureFixture
    ) -> None:
        service.list.return_value = SimpleNamespace(
            rc=0,
            registrations=[SimpleNamespace(add_code=1, student_id=123456, name=None)],
        )
        assert client.list_students("h:1", "CS158A") == 0
        assert capsys.readouterr().out == "1 123456 \n"
