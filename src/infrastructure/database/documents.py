"""Conversion between nested domain entries and their JSON documents."""

from datetime import date, datetime
from typing import Any, Callable
from uuid import UUID

from domain.entities.post import Comment, Like
from domain.entities.profile import Education, Experience, SocialLinks


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def like_to_document(like: Like) -> dict[str, Any]:
    return {
        "id": str(like.id),
        "user_id": str(like.user_id),
        "created_at": like.created_at.isoformat(),
    }


def like_from_document(doc: dict[str, Any]) -> Like:
    return Like(
        id=UUID(doc["id"]),
        user_id=UUID(doc["user_id"]),
        created_at=datetime.fromisoformat(doc["created_at"]),
    )


def comment_to_document(comment: Comment) -> dict[str, Any]:
    return {
        "id": str(comment.id),
        "user_id": str(comment.user_id),
        "text": comment.text,
        "name": comment.name,
        "avatar": comment.avatar,
        "created_at": comment.created_at.isoformat(),
    }


def comment_from_document(doc: dict[str, Any]) -> Comment:
    return Comment(
        id=UUID(doc["id"]),
        user_id=UUID(doc["user_id"]),
        text=doc["text"],
        name=doc.get("name", ""),
        avatar=doc.get("avatar"),
        created_at=datetime.fromisoformat(doc["created_at"]),
    )


def experience_to_document(entry: Experience) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "title": entry.title,
        "company": entry.company,
        "location": entry.location,
        "from_date": entry.from_date.isoformat(),
        "to_date": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def experience_from_document(doc: dict[str, Any]) -> Experience:
    return Experience(
        id=UUID(doc["id"]),
        title=doc["title"],
        company=doc["company"],
        location=doc.get("location"),
        from_date=date.fromisoformat(doc["from_date"]),
        to_date=_date_or_none(doc.get("to_date")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def education_to_document(entry: Education) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "school": entry.school,
        "degree": entry.degree,
        "fieldofstudy": entry.fieldofstudy,
        "from_date": entry.from_date.isoformat(),
        "to_date": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def education_from_document(doc: dict[str, Any]) -> Education:
    return Education(
        id=UUID(doc["id"]),
        school=doc["school"],
        degree=doc["degree"],
        fieldofstudy=doc["fieldofstudy"],
        from_date=date.fromisoformat(doc["from_date"]),
        to_date=_date_or_none(doc.get("to_date")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def social_to_document(social: SocialLinks) -> dict[str, Any]:
    return {key: value for key, value in vars(social).items() if value}


def social_from_document(doc: dict[str, Any] | None) -> SocialLinks:
    return SocialLinks(**(doc or {}))


POST_COLLECTION_ENCODERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    "likes": like_to_document,
    "comments": comment_to_document,
}

PROFILE_COLLECTION_ENCODERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    "experience": experience_to_document,
    "education": education_to_document,
}
