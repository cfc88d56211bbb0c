"""Tests for beachdata.service."""

from unittest.mock import MagicMock, patch

import pytest

from beachdata.models import RawTournamentRecord
from beachdata.service import (
    error_payload,
    get_livescore,
    get_rankings,
    get_tournament_detail,
    load_tournament_html,
)
from beachdata.util import (
    FetchError,
    MissingParameterError,
    ParseError,
    TcodeUnavailableError,
    TournamentNotFoundError,
)


def _record(**overrides) -> RawTournamentRecord:
    defaults = dict(
        id="2026-abc123", season=2026, type="BPT", name="Elite16 Doha",
        men_date="15.03.-19.03.2026", women_date="15.03.-19.03.2026",
        country="QAT",
        men_url="https://fivb.12ndr.at/tournament?tcode=MEN1",
        women_url="https://fivb.12ndr.at/tournament?tcode=WOM1",
        start_day=15, start_month=3,
    )
    defaults.update(overrides)
    return RawTournamentRecord(**defaults)


class TestGetRankings:
    @patch("beachdata.service.fetch_json")
    def test_payload(self, mock_fetch: MagicMock) -> None:
        def fake(url):
            if url.endswith("gender=m"):
                return [{"Position": "1", "TeamName": "Mol / Sorum", "TeamCountryCode": "NOR",
                         "EntryPointsTeam": "8,610"}]
            return [{"TeamName": "Hughes / Cheng", "Federation": "USA", "Points": 8820}]
        mock_fetch.side_effect = fake

        payload = get_rankings()

        assert payload["men"] == [
            {"rank": 1, "team": "Mol / Sorum", "country": "NOR", "points": 8610},
        ]
        assert payload["women"] == [
            {"rank": 1, "team": "Hughes / Cheng", "country": "USA", "points": 8820},
        ]
        assert payload["source"] == "https://fivb.12ndr.at/rankings/entry-men"
        assert payload["updatedAt"]
        assert mock_fetch.call_count == 2

    @patch("beachdata.service.fetch_json", side_effect=FetchError("HTTP 502"))
    def test_upstream_failure(self, mock_fetch: MagicMock) -> None:
        with pytest.raises(FetchError):
            get_rankings()

    @patch("beachdata.service.fetch_json", return_value={"error": "x"})
    def test_non_list_feed(self, mock_fetch: MagicMock) -> None:
        with pytest.raises(ParseError):
            get_rankings()


class TestGetLivescore:
    @patch("beachdata.service.fetch_json")
    def test_payload(self, mock_fetch: MagicMock, livescore_fragment_html: str) -> None:
        mock_fetch.return_value = [{"LiveScore": livescore_fragment_html}, {"LiveScore": None}]

        payload = get_livescore()

        assert len(payload["matches"]) == 1
        assert payload["matches"][0]["court"] == "Center Court"
        assert payload["source"] == "https://fivb.12ndr.at/livescore"
        assert "updatedAt" in payload

    @patch("beachdata.fetch.requests.get")
    def test_repeat_call_within_window_served_locally(self, mock_get: MagicMock) -> None:
        mock_get.return_value = MagicMock(status_code=200, text="[]")

        assert get_livescore()["matches"] == []
        assert get_livescore()["matches"] == []
        mock_get.assert_called_once()


class TestLoadTournamentHtml:
    @patch("beachdata.service.fetch_page", return_value="<div>cached</div>")
    def test_cached_mirror(self, mock_fetch: MagicMock) -> None:
        assert load_tournament_html("ABC") == "<div>cached</div>"
        mock_fetch.assert_called_once_with(
            "https://fivb.12ndr.at/cache/scripts/tournament_html_ABC.html",
        )

    @patch("beachdata.service.fetch_page")
    def test_falls_back_to_live(self, mock_fetch: MagicMock) -> None:
        mock_fetch.side_effect = [FetchError("HTTP 404"), "<div>live</div>"]
        assert load_tournament_html("ABC") == "<div>live</div>"
        assert mock_fetch.call_args.args[0] == (
            "https://fivb.12ndr.at/scripts/tournament.php?tcode=ABC"
        )

    @patch("beachdata.service.fetch_page", side_effect=FetchError("down"))
    def test_both_fail(self, mock_fetch: MagicMock) -> None:
        with pytest.raises(FetchError):
            load_tournament_html("ABC")
        assert mock_fetch.call_count == 2


class TestGetTournamentDetail:
    @patch("beachdata.service.load_tournament_html")
    def test_sanitized_payload(self, mock_load: MagicMock, tournament_detail_html: str) -> None:
        mock_load.return_value = tournament_detail_html

        payload = get_tournament_detail([_record()], "2026-abc123")

        assert payload["id"] == "2026-abc123"
        assert payload["tcode"] == "WOM1"  # women's URL is tried first
        assert "<script" not in payload["html"].lower()
        assert "updatedAt" in payload
        mock_load.assert_called_once_with("WOM1")

    @patch("beachdata.service.load_tournament_html", return_value="<p></p>")
    def test_men_url_fallback(self, mock_load: MagicMock) -> None:
        payload = get_tournament_detail([_record(women_url=None)], "2026-abc123")
        assert payload["tcode"] == "MEN1"

    def test_missing_id(self) -> None:
        with pytest.raises(MissingParameterError) as exc:
            get_tournament_detail([_record()], "")
        assert exc.value.status == 400

    def test_unknown_id(self) -> None:
        with pytest.raises(TournamentNotFoundError) as exc:
            get_tournament_detail([_record()], "2026-nope")
        assert exc.value.status == 404

    def test_no_tcode(self) -> None:
        with pytest.raises(TcodeUnavailableError) as exc:
            get_tournament_detail([_record(men_url=None, women_url=None)], "2026-abc123")
        assert exc.value.status == 422

    @patch("beachdata.service.load_tournament_html", side_effect=FetchError("down"))
    def test_fetch_failure(self, mock_load: MagicMock) -> None:
        with pytest.raises(FetchError) as exc:
            get_tournament_detail([_record()], "2026-abc123")
        assert exc.value.status == 500


class TestErrorPayload:
    def test_status_and_message(self) -> None:
        assert error_payload(TournamentNotFoundError("Tournament not found")) == (
            {"error": "Tournament not found"}, 404,
        )

    def test_empty_message(self) -> None:
        assert error_payload(FetchError()) == ({"error": "FetchError"}, 500)
