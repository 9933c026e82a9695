from datetime import datetime
from typing import Any, List, Optional
from urllib.parse import quote, urlsplit

from ..models.profile import EducationView, ExperienceView, ProfileView, ProjectView

AVATAR_FALLBACK_URL = "https://ui-avatars.com/api/?name="


def format_date(date: dict) -> str:
    """
    Formats a Proxycurl date object as yyyy-mm, or yyyy when the month is missing.
    """
    month = date.get("month")
    return f"{date['year']}-{month:02d}" if month else f"{date['year']}"


def _valid_date(value: Any) -> Optional[dict]:
    if not isinstance(value, dict) or not isinstance(value.get("year"), int):
        return None
    for key in ("month", "day"):
        if value.get(key) is not None and not isinstance(value.get(key), int):
            return None
    return value


def is_ongoing(entry: dict) -> bool:
    end_date = _valid_date(entry.get("ends_at"))
    if end_date is None:
        return True
    end_month = end_date.get("month") or 12  # Default to December if month is not provided
    if not 1 <= end_month <= 12:
        end_month = 12
    now = datetime.now()
    return (end_date["year"], end_month) >= (now.year, now.month)


def format_duration(entry: dict, start_key: str = "starts_at", end_key: str = "ends_at") -> str:
    """
    Formats an entry's date range as "yyyy-mm to yyyy-mm" or "yyyy-mm to Present".
    """
    start_date = _valid_date(entry.get(start_key))
    end_date = _valid_date(entry.get(end_key))
    start_str = format_date(start_date) if start_date else "Unknown"
    end_str = format_date(end_date) if end_date else "Present"
    return f"{start_str} to {end_str}"


def get_location(profile: dict) -> str:
    parts = [profile.get("city"), profile.get("state"), profile.get("country_full_name")]
    return ", ".join(str(part) for part in parts if part)


def avatar_url(profile: dict) -> str:
    picture = _http_url(profile.get("profile_pic_url"))
    if picture:
        return picture
    return AVATAR_FALLBACK_URL + quote(str(profile.get("full_name") or ""), safe="")


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _http_url(value: Any) -> Optional[str]:
    url = _text(value)
    if url is None:
        return None
    try:
        scheme = urlsplit(url.strip()).scheme.lower()
    except ValueError:
        return None
    return url if scheme in ("http", "https") else None


def _items(profile: dict, key: str) -> List[dict]:
    value = profile.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _experiences(profile: dict) -> List[ExperienceView]:
    experiences = []
    for experience in _items(profile, "experiences"):
        title = _text(experience.get("title"))
        company = _text(experience.get("company"))
        if not title and not company:
            continue
        experiences.append(
            ExperienceView(
                title=title or company,
                company=company if title else None,
                location=_text(experience.get("location")),
                duration=format_duration(experience),
                current=is_ongoing(experience),
                description=_text(experience.get("description")),
            )
        )
    return experiences


def _education(profile: dict) -> List[EducationView]:
    education = []
    for entry in _items(profile, "education"):
        school = _text(entry.get("school"))
        if not school:
            continue
        has_dates = _valid_date(entry.get("starts_at")) or _valid_date(entry.get("ends_at"))
        education.append(
            EducationView(
                school=school,
                degree=_text(entry.get("degree_name")),
                field_of_study=_text(entry.get("field_of_study")),
                duration=format_duration(entry) if has_dates else None,
                current=bool(has_dates) and is_ongoing(entry),
                description=_text(entry.get("description")),
            )
        )
    return education


def _projects(profile: dict) -> List[ProjectView]:
    projects = []
    for project in _items(profile, "accomplishment_projects"):
        title = _text(project.get("title"))
        if not title:
            continue
        has_dates = _valid_date(project.get("starts_at")) or _valid_date(project.get("ends_at"))
        projects.append(
            ProjectView(
                title=title,
                url=_http_url(project.get("url")),
                duration=format_duration(project) if has_dates else None,
                description=_text(project.get("description")),
            )
        )
    return projects


def _skills(profile: dict) -> List[str]:
    skills = profile.get("skills")
    if not isinstance(skills, list):
        return []
    return [skill for skill in skills if _text(skill)]


def build_profile_view(profile: dict) -> ProfileView:
    """
    Picks the displayable fields out of a profile payload.
    The payload shape is owned by the upstream API, so every field is optional
    and sections that are absent, null or empty come back empty.
    """
    return ProfileView(
        full_name=_text(profile.get("full_name")) or "",
        avatar_url=avatar_url(profile),
        headline=_text(profile.get("headline")),
        occupation=_text(profile.get("occupation")),
        location=get_location(profile),
        summary=_text(profile.get("summary")),
        experiences=_experiences(profile),
        education=_education(profile),
        skills=_skills(profile),
        projects=_projects(profile),
    )


def error_message(status_code: int, data: Any) -> str:
    """Picks a human readable message out of an upstream error body."""
    if isinstance(data, dict):
        for key in ("error", "description", "detail", "message"):
            if _text(data.get(key)):
                return data[key]
    return f"Profile API returned status {status_code}"
