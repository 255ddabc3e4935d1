from typing import Optional, List
from sqlalchemy import String, Integer, ForeignKey, Enum, DateTime, JSON, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from app.database import Base
from app.engine.state import MatchStatus


class Match(Base):
    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Teams
    team1_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))
    team2_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))
    team1: Mapped["Team"] = relationship("Team", foreign_keys=[team1_id])
    team2: Mapped["Team"] = relationship("Team", foreign_keys=[team2_id])

    # Match info
    venue: Mapped[str] = mapped_column(String(100), default="")
    start_time: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    max_overs: Mapped[int] = mapped_column(Integer, default=20)

    # Status
    status: Mapped[MatchStatus] = mapped_column(Enum(MatchStatus), default=MatchStatus.UPCOMING)
    current_innings: Mapped[int] = mapped_column(Integer, default=1)

    # Result (winner_id is 0 for a tie, so no foreign key)
    winner_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    result_summary: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # Relationships
    innings: Mapped[List["Innings"]] = relationship(
        "Innings",
        back_populates="match",
        order_by="Innings.innings_number",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Match {self.team1_id} vs {self.team2_id} ({self.status.value})>"


class Innings(Base):
    __tablename__ = "innings"

    id: Mapped[int] = mapped_column(primary_key=True)
    match_id: Mapped[int] = mapped_column(ForeignKey("matches.id"))
    match: Mapped["Match"] = relationship("Match", back_populates="innings")

    batting_team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))
    bowling_team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))

    innings_number: Mapped[int] = mapped_column(Integer)  # 1 or 2

    # Score
    total_runs: Mapped[int] = mapped_column(Integer, default=0)
    wickets: Mapped[int] = mapped_column(Integer, default=0)
    overs_completed: Mapped[int] = mapped_column(Integer, default=0)
    balls_in_current_over: Mapped[int] = mapped_column(Integer, default=0)
    extras: Mapped[int] = mapped_column(Integer, default=0)

    # Target (for 2nd innings)
    target: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Players at the crease
    striker_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    non_striker_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    current_bowler_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    awaiting_batsman: Mapped[bool] = mapped_column(Boolean, default=False)

    # Scorecard lines and ball by ball, stored as JSON documents
    batsmen_stats: Mapped[list] = mapped_column(JSON, default=list)
    bowler_stats: Mapped[list] = mapped_column(JSON, default=list)
    overs_history: Mapped[list] = mapped_column(JSON, default=list)

    @property
    def overs_display(self) -> str:
        return f"{self.overs_completed}.{self.balls_in_current_over}"

    def __repr__(self):
        return f"<Innings {self.innings_number}: {self.total_runs}/{self.wickets} ({self.overs_display})>"
