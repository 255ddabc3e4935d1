"""
Match state for the scoring engine.

Plain dataclasses with no I/O. The engine functions take a Match, copy it,
and hand back the updated copy for the caller to persist.
"""
import enum
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, List

BALLS_PER_OVER = 6
MAX_WICKETS = 10

# winner_id for a tied match; team ids start at 1
TIED = 0


class MatchStatus(enum.Enum):
    UPCOMING = "UPCOMING"
    LIVE = "LIVE"
    COMPLETED = "COMPLETED"


class ExtraType(enum.Enum):
    NONE = "none"
    WIDE = "wide"
    NO_BALL = "no-ball"
    BYE = "bye"
    LEG_BYE = "leg-bye"

    @property
    def is_rebowled(self) -> bool:
        """Wides and no-balls don't count toward the over"""
        return self in (ExtraType.WIDE, ExtraType.NO_BALL)

    @property
    def penalty(self) -> int:
        return 1 if self.is_rebowled else 0


class WicketType(enum.Enum):
    BOWLED = "bowled"
    CAUGHT = "caught"
    LBW = "lbw"
    RUN_OUT = "run_out"
    STUMPED = "stumped"
    HIT_WICKET = "hit_wicket"
    CAUGHT_BEHIND = "caught_behind"


@dataclass
class TeamRef:
    id: int
    name: str
    short_name: str = ""


@dataclass
class BallEvent:
    """A single delivery as reported by the scorer"""
    runs: int = 0
    is_wicket: bool = False
    extra_type: ExtraType = ExtraType.NONE
    wicket_type: Optional[WicketType] = None

    def __post_init__(self):
        # Accept the raw strings the scoring console sends
        self.extra_type = ExtraType(self.extra_type)
        if self.wicket_type is not None:
            self.wicket_type = WicketType(self.wicket_type)
        if not 0 <= self.runs <= 6:
            raise ValueError(f"runs must be between 0 and 6, got {self.runs}")
        if self.wicket_type is not None and not self.is_wicket:
            raise ValueError("wicket_type given for a ball that is not a wicket")

    @property
    def is_legal(self) -> bool:
        return not self.extra_type.is_rebowled


@dataclass
class BallRecord:
    """A delivery as kept in the over history"""
    runs: int
    is_extra: bool
    extra_type: Optional[str]
    is_wicket: bool
    batsman_id: int
    bowler_id: int
    wicket_type: Optional[str] = None

    @property
    def label(self) -> str:
        """Short scoreboard label for the 'this over' strip"""
        if self.is_wicket:
            return "W"
        if self.extra_type == ExtraType.WIDE.value:
            return "Wd" if self.runs == 0 else f"{self.runs}Wd"
        if self.extra_type == ExtraType.NO_BALL.value:
            return "Nb" if self.runs == 0 else f"{self.runs}Nb"
        if self.extra_type == ExtraType.BYE.value:
            return f"{self.runs}B"
        if self.extra_type == ExtraType.LEG_BYE.value:
            return f"{self.runs}Lb"
        return str(self.runs)


@dataclass
class Over:
    number: int
    balls: List[BallRecord] = field(default_factory=list)

    @property
    def runs(self) -> int:
        return sum(
            (0 if b.is_wicket else b.runs) + ExtraType(b.extra_type or ExtraType.NONE.value).penalty
            for b in self.balls
        )


@dataclass
class BatsmanStats:
    """Tracks a batter's innings"""
    player_id: int
    name: str
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    is_out: bool = False
    dismissal: Optional[str] = None

    @property
    def strike_rate(self) -> float:
        if self.balls == 0:
            return 0.0
        return (self.runs / self.balls) * 100


@dataclass
class BowlerStats:
    """Tracks a bowler's spell"""
    player_id: int
    name: str
    overs: int = 0
    balls: int = 0
    runs: int = 0
    wickets: int = 0
    wides: int = 0
    no_balls: int = 0

    @property
    def overs_display(self) -> str:
        return f"{self.overs}.{self.balls}"

    @property
    def economy(self) -> float:
        total_balls = self.overs * BALLS_PER_OVER + self.balls
        if total_balls == 0:
            return 0.0
        return (self.runs / total_balls) * BALLS_PER_OVER


@dataclass
class Inning:
    """One team's turn at bat"""
    batting_team_id: int
    bowling_team_id: int
    runs: int = 0
    wickets: int = 0
    overs: int = 0
    balls: int = 0
    extras: int = 0
    target: Optional[int] = None

    striker_id: Optional[int] = None
    non_striker_id: Optional[int] = None
    current_bowler_id: Optional[int] = None
    # Set by a wicket, cleared when a batter is next assigned
    awaiting_batsman: bool = False

    batsmen_stats: List[BatsmanStats] = field(default_factory=list)
    bowler_stats: List[BowlerStats] = field(default_factory=list)
    overs_history: List[Over] = field(default_factory=list)

    @property
    def legal_balls(self) -> int:
        return self.overs * BALLS_PER_OVER + self.balls

    @property
    def overs_display(self) -> str:
        return f"{self.overs}.{self.balls}"

    @property
    def run_rate(self) -> float:
        if self.legal_balls == 0:
            return 0.0
        return (self.runs / self.legal_balls) * BALLS_PER_OVER

    def balls_remaining(self, max_overs: int) -> int:
        return max(0, max_overs * BALLS_PER_OVER - self.legal_balls)

    def required_rate(self, max_overs: int) -> Optional[float]:
        if self.target is None:
            return None
        balls_left = self.balls_remaining(max_overs)
        if balls_left == 0:
            return None
        return (max(0, self.target - self.runs) / balls_left) * BALLS_PER_OVER

    def batsman(self, player_id: int) -> Optional[BatsmanStats]:
        return next((s for s in self.batsmen_stats if s.player_id == player_id), None)

    def bowler(self, player_id: int) -> Optional[BowlerStats]:
        return next((s for s in self.bowler_stats if s.player_id == player_id), None)

    @property
    def this_over(self) -> Optional[Over]:
        """The over in progress, or the last completed one between overs"""
        return self.overs_history[-1] if self.overs_history else None

    @classmethod
    def from_dict(cls, data: dict) -> "Inning":
        data = dict(data)
        data["batsmen_stats"] = [BatsmanStats(**s) for s in data.get("batsmen_stats", [])]
        data["bowler_stats"] = [BowlerStats(**s) for s in data.get("bowler_stats", [])]
        data["overs_history"] = [
            Over(number=o["number"], balls=[BallRecord(**b) for b in o.get("balls", [])])
            for o in data.get("overs_history", [])
        ]
        return cls(**data)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Match:
    """One fixture between two teams"""
    team_a: TeamRef
    team_b: TeamRef
    id: Optional[int] = None
    status: MatchStatus = MatchStatus.UPCOMING
    current_innings: int = 1
    max_overs: int = 20
    innings: List[Inning] = field(default_factory=list)
    winner_id: Optional[int] = None
    result_summary: Optional[str] = None
    venue: str = ""
    start_time: Optional[datetime] = None

    @property
    def current(self) -> Optional[Inning]:
        """The open innings, if any"""
        if len(self.innings) < self.current_innings:
            return None
        return self.innings[self.current_innings - 1]

    @property
    def is_tie(self) -> bool:
        return self.status == MatchStatus.COMPLETED and self.winner_id == TIED

    def team(self, team_id: int) -> Optional[TeamRef]:
        for team in (self.team_a, self.team_b):
            if team.id == team_id:
                return team
        return None

    def opponent_of(self, team_id: int) -> TeamRef:
        return self.team_b if team_id == self.team_a.id else self.team_a

    def check_invariants(self):
        """Raise ValueError if the innings list disagrees with the status"""
        if self.current_innings not in (1, 2):
            raise ValueError(f"current_innings must be 1 or 2, got {self.current_innings}")
        if self.status == MatchStatus.UPCOMING:
            if self.innings:
                raise ValueError("An upcoming match cannot have innings")
        elif len(self.innings) != self.current_innings:
            raise ValueError(
                f"{self.status.value} match has {len(self.innings)} innings "
                f"but current innings is {self.current_innings}"
            )
        for inning in self.innings:
            if not 0 <= inning.wickets <= MAX_WICKETS:
                raise ValueError(f"wickets out of range: {inning.wickets}")
            if not 0 <= inning.balls < BALLS_PER_OVER:
                raise ValueError(f"balls out of range: {inning.balls}")

    def __repr__(self):
        return f"<Match {self.team_a.short_name or self.team_a.name} vs {self.team_b.short_name or self.team_b.name}>"
