# api/routers/comments.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.deps import get_current_user, get_db
from api.routers.utils import commit_or_http
from api.schemas.comments import CommentIn, CommentOut
from db.models import Comment, Profile, Species

# /species/{id}/comments
species_scoped = APIRouter(prefix="/species/{species_id}/comments", tags=["comments"])
# /comments/{id}
comment_detail = APIRouter(prefix="/comments", tags=["comments"])


def _serialize_comment(c: Comment) -> CommentOut:
    return CommentOut.model_validate(
        {
            "id": c.id,
            "species_id": c.species_id,
            "author": c.author,
            "content": c.content,
            "created_at": c.created_at,
            "author_name": c.author_profile.display_name if c.author_profile else None,
        }
    )


@species_scoped.get("", response_model=list[CommentOut])
def list_comments(
    species_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    if db.get(Species, species_id) is None:
        raise HTTPException(status_code=404, detail="Species not found")
    rows = (
        db.query(Comment)
        .filter(Comment.species_id == species_id)
        .order_by(Comment.created_at.desc())
        .all()
    )
    return [_serialize_comment(c) for c in rows]


@species_scoped.post("", response_model=CommentOut, status_code=201)
def post_comment(
    species_id: int,
    payload: CommentIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    text = payload.content.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Comment cannot be empty")
    if db.get(Species, species_id) is None:
        raise HTTPException(status_code=404, detail="Species not found")

    c = Comment(species_id=species_id, author=user.id, content=text)
    db.add(c)
    commit_or_http(db, "Failed to post comment")
    db.refresh(c)
    return _serialize_comment(c)


@comment_detail.delete("/{comment_id}", status_code=204)
def delete_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    c = db.get(Comment, comment_id)
    if c is None:
        raise HTTPException(status_code=404, detail="Comment not found")
    if c.author != user.id:
        raise HTTPException(status_code=403, detail="Only the author can delete this comment")
    db.delete(c)
    commit_or_http(db, "Failed to delete")
