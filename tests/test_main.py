"""Tests for main module."""

from villa_gallery import main as main_module


def test_main_runs_uvicorn_on_configured_port(monkeypatch) -> None:
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "villa")
    monkeypatch.setenv("CLOUDINARY_API_KEY", "key")
    monkeypatch.setenv("CLOUDINARY_API_SECRET", "secret")
    monkeypatch.setenv("PORT", "4000")
    calls: list[dict[str, object]] = []

    def fake_run(app, **kwargs) -> None:  # type: ignore[no-untyped-def]
        calls.append(kwargs)

    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)

    main_module.main()

    assert calls == [{"host": "0.0.0.0", "port": 4000}]
