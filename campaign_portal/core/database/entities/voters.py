"""Electoral roll: voter areas (metadata) and voter rows."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Field

from ..base import TimestampedBase


class VoterMetadata(TimestampedBase, table=True):
    """One voter area of the roll.

    Table: voter_metadata
    """

    __tablename__ = "voter_metadata"
    __table_args__ = ({"extend_existing": True},)

    district: Optional[str] = None
    upazila_thana: Optional[str] = None
    city_corporation_pourashava: Optional[str] = None
    union_pouro_ward_cant_board: Optional[str] = None
    ward_no: Optional[str] = None
    ward_no_for_union: Optional[str] = None
    voter_area_name: str
    voter_area_no: str = Field(index=True)
    post_office: Optional[str] = None
    post_code: Optional[str] = None


class Voter(TimestampedBase, table=True):
    """Table: voter_list"""

    __tablename__ = "voter_list"
    __table_args__ = ({"extend_existing": True},)

    voter_metadata_id: int = Field(foreign_key="voter_metadata.id", ondelete="CASCADE", index=True)
    serial_no: int = Field(index=True)
    voter_no: str = Field(index=True)
    voter_name: str
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    profession: Optional[str] = None
    date_of_birth: date = Field(index=True)
    address: Optional[str] = None
