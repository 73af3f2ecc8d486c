"""The WSGI module should expose an application built from the bundled settings."""

from http import HTTPStatus

from langunpack.config import clear_settings_cache


def test_wsgi_application_serves_health() -> None:
    clear_settings_cache()
    from langunpack.wsgi import application

    response = application.test_client().get("/health")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["languages"][0] == "bp"
    assert "enemies" in payload["categories"]
