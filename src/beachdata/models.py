"""Data models."""

from dataclasses import dataclass, field

TOURS = ("pro", "cev", "int", "nt", "snow")
WEEKS = ("all", "last", "this", "next")
STATUSES = ("live", "upcoming")


@dataclass
class RawTournamentRecord:
    id: str  # <season>-<tcode lowercased>
    season: int
    type: str
    name: str
    men_date: str | None
    women_date: str | None
    country: str
    men_url: str | None
    women_url: str | None
    start_day: int | None
    start_month: int | None

    def to_dict(self) -> dict:
        """Persisted form, keys in dataset order."""
        return {
            "id": self.id,
            "season": self.season,
            "type": self.type,
            "name": self.name,
            "menDate": self.men_date,
            "womenDate": self.women_date,
            "country": self.country,
            "menUrl": self.men_url,
            "womenUrl": self.women_url,
            "startDay": self.start_day,
            "startMonth": self.start_month,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "RawTournamentRecord":
        return cls(
            id=d["id"],
            season=int(d["season"]),
            type=d.get("type", ""),
            name=d.get("name", ""),
            men_date=d.get("menDate"),
            women_date=d.get("womenDate"),
            country=d.get("country", ""),
            men_url=d.get("menUrl"),
            women_url=d.get("womenUrl"),
            start_day=d.get("startDay"),
            start_month=d.get("startMonth"),
        )


@dataclass
class ClassifiedTournament:
    id: str
    tier: str
    name: str
    season: int
    country: str
    men_date: str | None
    women_date: str | None
    men_url: str | None
    women_url: str | None
    tour: str  # one of TOURS
    week: str  # schedule week membership, one of WEEKS
    status: str  # "live" / "upcoming", derived from week only

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tier": self.tier,
            "name": self.name,
            "season": self.season,
            "country": self.country,
            "menDate": self.men_date,
            "womenDate": self.women_date,
            "menUrl": self.men_url,
            "womenUrl": self.women_url,
            "tour": self.tour,
            "week": self.week,
            "status": self.status,
        }


@dataclass
class RankingRow:
    rank: int
    team: str
    country: str
    points: float


@dataclass
class LiveMatch:
    id: str
    tournament: str
    teams: tuple[str, str]
    clock: str
    court: str
    detail_url: str | None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tournament": self.tournament,
            "teams": list(self.teams),
            "clock": self.clock,
            "court": self.court,
            "detailUrl": self.detail_url,
        }


@dataclass
class SeasonResult:
    season: int
    url: str
    records: list[RawTournamentRecord] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
