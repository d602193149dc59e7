"""
Terminal client tests: salesperson session flag and the error screen.
"""
import pytest

import showcase_client
from showcase_client import ShowcaseClient, UNEXPECTED_ERROR_MESSAGE
from showcase.views.router import fragment_for


class TestSalespersonSession:
    def test_sign_in_is_checked_by_server(self, api, monkeypatch):
        monkeypatch.setattr(showcase_client.requests, "post", api.post)
        client = ShowcaseClient("http://testserver")

        assert not client.gate.sign_in("Dan", "wrong")
        assert not client.gate.authenticated

        assert client.gate.sign_in(" Dan ", "upload123")
        assert client.gate.authenticated
        assert client.gate.salesperson_name == "Dan"

        client.gate.sign_out()
        assert not client.gate.authenticated
        assert client.gate.salesperson_name == ""

    def test_blank_name_never_reaches_server(self, monkeypatch):
        def unexpected_post(*args, **kwargs):
            raise AssertionError("sign-in request sent for a blank name")

        monkeypatch.setattr(showcase_client.requests, "post", unexpected_post)
        client = ShowcaseClient("http://testserver")
        assert not client.gate.sign_in("   ", "upload123")
        assert not client.gate.authenticated


class BrokenOnceClient(ShowcaseClient):
    """Client whose first render fails like a malformed server response."""

    def __init__(self):
        super().__init__("http://testserver")
        self.rendered = []

    def clear_screen(self):
        pass

    def render(self, route):
        self.rendered.append(fragment_for(route))
        if len(self.rendered) == 1:
            raise KeyError("make")
        return ""


class TestErrorScreen:
    @pytest.mark.parametrize("answer, expected", [
        ("", ["#/admin", "#/admin"]),
        ("q", ["#/admin"]),
    ])
    def test_unexpected_error_offers_reload(self, monkeypatch, capsys, answer, expected):
        monkeypatch.setattr("builtins.input", lambda text="": answer)
        client = BrokenOnceClient()

        client.run("#/admin")

        assert client.rendered == expected
        output = capsys.readouterr().out
        assert UNEXPECTED_ERROR_MESSAGE in output
        assert "Goodbye!" in output

    def test_interrupt_on_error_screen_quits(self, monkeypatch):
        def interrupted(text=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", interrupted)
        client = BrokenOnceClient()
        client.run("#/vehicle/abc")
        assert client.rendered == ["#/vehicle/abc"]
