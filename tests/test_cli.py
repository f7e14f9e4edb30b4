from datetime import date, timedelta

from app.services import catalog, settings as settings_service


def test_seed_menu_only_once(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["seed-menu"])
    assert result.exit_code == 0
    count = len(catalog.list_items())
    assert count > 0

    result = runner.invoke(args=["seed-menu"])
    assert "already has items" in result.output
    assert len(catalog.list_items()) == count


def test_toggle_blocked_date_command(app):
    day = (date.today() + timedelta(days=10)).isoformat()
    runner = app.test_cli_runner()

    result = runner.invoke(args=["toggle-blocked-date", day])
    assert result.exit_code == 0
    assert f"{day} is now blocked." in result.output
    assert settings_service.get_blocked_dates() == [day]

    result = runner.invoke(args=["toggle-blocked-date", day])
    assert f"{day} is now available." in result.output
    assert settings_service.get_blocked_dates() == []


def test_toggle_blocked_date_rejects_garbage(app):
    result = app.test_cli_runner().invoke(args=["toggle-blocked-date", "not-a-date"])
    assert result.exit_code != 0
