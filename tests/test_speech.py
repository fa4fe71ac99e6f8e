try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

from datetime import datetime, timezone

from alexa_skill import speech
from app.schemas.plants import HealthReport


def test_health_card_shows_recommendations_and_check_time() -> None:
    report = HealthReport.from_status("Warning")
    report.last_checked = datetime(2026, 10, 18, 9, 5, tzinfo=timezone.utc)

    content = speech.health_card_content(report)

    assert content.splitlines()[0] == "Status: Warning"
    assert "- Review watering schedule" in content
    assert content.endswith("Last checked: 2026-10-18 09:05 UTC")
