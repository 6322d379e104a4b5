"""Voter roll I/O models."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from .common import EntityRead


class VoterMetadataWrite(BaseModel):
    district: Optional[str] = None
    upazila_thana: Optional[str] = None
    city_corporation_pourashava: Optional[str] = None
    union_pouro_ward_cant_board: Optional[str] = None
    ward_no: Optional[str] = None
    ward_no_for_union: Optional[str] = None
    voter_area_name: str = Field(min_length=1)
    voter_area_no: str = Field(min_length=1)
    post_office: Optional[str] = None
    post_code: Optional[str] = None


class VoterMetadataUpdate(BaseModel):
    district: Optional[str] = None
    upazila_thana: Optional[str] = None
    city_corporation_pourashava: Optional[str] = None
    union_pouro_ward_cant_board: Optional[str] = None
    ward_no: Optional[str] = None
    ward_no_for_union: Optional[str] = None
    voter_area_name: Optional[str] = None
    voter_area_no: Optional[str] = None
    post_office: Optional[str] = None
    post_code: Optional[str] = None


class VoterMetadataRead(VoterMetadataWrite, EntityRead):
    pass


class WardOption(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    voter_area_name: str
    voter_area_no: str
    union_pouro_ward_cant_board: Optional[str] = None
    ward_no_for_union: Optional[str] = None


class VoterWrite(BaseModel):
    voter_metadata_id: int
    serial_no: int = Field(ge=0)
    voter_no: str = Field(min_length=1)
    voter_name: str = Field(min_length=1)
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    profession: Optional[str] = None
    date_of_birth: date
    address: Optional[str] = None


class VoterRead(VoterWrite, EntityRead):
    voter_metadata: Optional[VoterMetadataRead] = None


class VoterSearchResult(BaseModel):
    voters: list[VoterRead]
    total: int


class VoterImport(BaseModel):
    voters: list[VoterWrite] = Field(min_length=1, max_length=5000)


class VoterImportResult(BaseModel):
    inserted: int
