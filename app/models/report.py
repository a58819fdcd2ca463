"""
Pydantic models for emergency reports.
These models handle validation for report submission and responses.

Fields are stored snake_case in Firestore and served camelCase
(patientName, createdAt, ...) to the dashboard.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, Dict, Optional


class ReportCreate(BaseModel):
    """
    Model for creating a new report (incoming POST /report body).
    Every field is optional: a missing field is stored as null.
    """
    role: Optional[str] = Field(None, description="Who is reporting, e.g. clinic or reporter")
    patient_name: Optional[str] = Field(None, description="Name of the patient")
    location: Optional[str] = Field(None, description="Where the incident happened")
    incident: Optional[str] = Field(None, description="What happened")
    severity: Optional[str] = Field(None, description="Informal severity label")
    symptoms: Optional[str] = Field(None, description="Observed symptoms")

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"
        json_schema_extra = {
            "example": {
                "role": "reporter",
                "patientName": "Jane",
                "location": "Zone A",
                "incident": "fall",
                "severity": "high",
                "symptoms": "dizzy",
            }
        }

    @field_validator("role", "patient_name", "location", "incident", "severity", "symptoms", mode="before")
    @classmethod
    def scalars_to_text(cls, value):
        """Numbers and booleans are stored as their text form (3 -> "3", true -> "true")."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=False)


class ReportResponse(BaseModel):
    """
    Model for report responses (what API returns).
    Includes system-generated fields like ID and timestamps.
    """
    id: str = Field(..., description="Firestore document ID")
    role: Optional[str] = None
    patient_name: Optional[str] = None
    location: Optional[str] = None
    incident: Optional[str] = None
    severity: Optional[str] = None
    symptoms: Optional[str] = None
    seen: bool = Field(default=False, description="Whether the dashboard acknowledged it")
    created_at: Optional[datetime] = Field(default=None, description="When report was created")
    updated_at: Optional[datetime] = Field(default=None, description="Last modification")

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_snapshot(cls, doc) -> "ReportResponse":
        data = doc.to_dict() or {}
        return cls(
            id=doc.id,
            role=data.get("role"),
            patient_name=data.get("patient_name"),
            location=data.get("location"),
            incident=data.get("incident"),
            severity=data.get("severity"),
            symptoms=data.get("symptoms"),
            seen=data.get("seen", False),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


class ReportCreated(BaseModel):
    ok: bool = True
    id: str