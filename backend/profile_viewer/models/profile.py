from typing import List, Optional

from pydantic import BaseModel


class FetchProfileRequest(BaseModel):
    url: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


class ExperienceView(BaseModel):
    title: str
    company: Optional[str] = None
    location: Optional[str] = None
    duration: str
    current: bool
    description: Optional[str] = None


class EducationView(BaseModel):
    school: str
    degree: Optional[str] = None
    field_of_study: Optional[str] = None
    duration: Optional[str] = None
    current: bool
    description: Optional[str] = None


class ProjectView(BaseModel):
    title: str
    url: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None


class ProfileView(BaseModel):
    """Display-ready subset of a profile payload."""

    full_name: str
    avatar_url: str
    headline: Optional[str] = None
    occupation: Optional[str] = None
    location: str = ""
    summary: Optional[str] = None
    experiences: List[ExperienceView] = []
    education: List[EducationView] = []
    skills: List[str] = []
    projects: List[ProjectView] = []
