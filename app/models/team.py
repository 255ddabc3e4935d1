from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import Optional
from app.database import Base


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    short_name: Mapped[str] = mapped_column(String(10))  # e.g., "MI", "CSK"
    logo_url: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)

    # Relationships
    players: Mapped[list["Player"]] = relationship("Player", back_populates="team")

    @property
    def squad_size(self) -> int:
        return len(self.players)

    def __repr__(self):
        return f"<Team {self.name} ({self.short_name})>"
