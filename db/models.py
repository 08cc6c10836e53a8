from __future__ import annotations

from typing import List, Optional

from sqlalchemy import BigInteger, ForeignKey, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from .mixins import TimeStampMixin
from .sqltypes import BigIntPK, new_uuid


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


# Profiles are created by the auth layer; ids are its opaque user ids.


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String)
    display_name: Mapped[Optional[str]] = mapped_column(String(30))
    avatar_url: Mapped[Optional[str]] = mapped_column(String)
    biography: Mapped[Optional[str]] = mapped_column(String(160))

    species: Mapped[List["Species"]] = relationship(back_populates="author_profile")

    def __repr__(self):
        return f"<Profile(id={self.id}, display_name={self.display_name})>"


class Species(TimeStampMixin, Base):
    __tablename__ = "species"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    author: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False
    )

    scientific_name: Mapped[Optional[str]] = mapped_column(String)
    common_name: Mapped[Optional[str]] = mapped_column(String)
    total_population: Mapped[Optional[int]] = mapped_column(BigInteger)
    kingdom: Mapped[Optional[str]] = mapped_column(String)
    description: Mapped[Optional[str]] = mapped_column(Text)
    image: Mapped[Optional[str]] = mapped_column(String)

    __table_args__ = (
        Index("ix_species_scientific_name", "scientific_name"),
        Index("ix_species_common_name", "common_name"),
    )

    author_profile: Mapped["Profile"] = relationship(back_populates="species")
    comments: Mapped[List["Comment"]] = relationship(
        back_populates="species", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<Species(id={self.id}, scientific_name={self.scientific_name}, common_name={self.common_name})>"


class Comment(TimeStampMixin, Base):
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    species_id: Mapped[int] = mapped_column(
        ForeignKey("species.id", ondelete="CASCADE"), index=True, nullable=False
    )
    author: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    species: Mapped["Species"] = relationship(back_populates="comments")
    author_profile: Mapped["Profile"] = relationship()

    def __repr__(self):
        return f"<Comment(id={self.id}, species_id={self.species_id}, author={self.author})>"
