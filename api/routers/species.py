# api/routers/species.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from api.deps import get_current_user, get_db
from api.routers.utils import commit_or_http, like_pattern
from api.schemas.autofill import AutofillIn, AutofillOut
from api.schemas.species import (
    SPECIES_FIELDS,
    SpeciesEditOut,
    SpeciesIn,
    SpeciesOut,
    SpeciesSnapshot,
    SpeciesUpdate,
)
from api.services.autofill import (
    AutofillNoMatch,
    AutofillQueryRequired,
    AutofillRequestFailed,
    autofill,
)
from db.models import Profile, Species

router = APIRouter(prefix="/species", tags=["species"])


def _serialize_species(sp: Species) -> SpeciesOut:
    return SpeciesOut.model_validate(
        {
            "id": sp.id,
            "author": sp.author,
            "author_name": (
                sp.author_profile.display_name if sp.author_profile else None
            ),
            "scientific_name": sp.scientific_name,
            "common_name": sp.common_name,
            "total_population": sp.total_population,
            "kingdom": sp.kingdom,
            "description": sp.description,
            "image": sp.image,
            "created_at": sp.created_at,
        }
    )


def _get_species(db: Session, species_id: int) -> Species:
    sp = db.get(Species, species_id)
    if sp is None:
        raise HTTPException(status_code=404, detail="Species not found")
    return sp


def _get_owned_species(db: Session, species_id: int, user: Profile) -> Species:
    """Only the recorded author may change or remove a species."""
    sp = _get_species(db, species_id)
    if sp.author != user.id:
        raise HTTPException(status_code=403, detail="Only the author can modify this species")
    return sp


@router.get("", response_model=list[SpeciesOut])
def list_species(
    q: Optional[str] = Query(
        None, description="Substring of scientific name, common name or description"
    ),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    qry = db.query(Species)
    if q and q.strip():
        pattern = like_pattern(q.strip())
        qry = qry.filter(
            or_(
                Species.scientific_name.ilike(pattern, escape="\\"),
                Species.common_name.ilike(pattern, escape="\\"),
                Species.description.ilike(pattern, escape="\\"),
            )
        )
    rows: List[Species] = (
        qry.order_by(Species.id.desc()).offset(offset).limit(limit).all()
    )
    return [_serialize_species(sp) for sp in rows]


@router.post("", response_model=SpeciesOut, status_code=201)
def create_species(
    payload: SpeciesIn,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    sp = Species(author=user.id, **payload.model_dump())
    db.add(sp)
    commit_or_http(db, "Failed to add species")
    db.refresh(sp)
    return _serialize_species(sp)


@router.post("/autofill", response_model=AutofillOut)
def autofill_species(
    payload: AutofillIn,
    user: Profile = Depends(get_current_user),
):
    try:
        result = autofill(payload.query, payload.draft)
    except AutofillQueryRequired as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AutofillNoMatch as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AutofillRequestFailed as e:
        raise HTTPException(status_code=502, detail=str(e))
    return AutofillOut(
        title=result.title,
        draft=result.draft,
        filled=result.filled,
        notification=result.notification,
    )


@router.post("/restore", response_model=SpeciesOut, status_code=201)
def restore_species(
    snapshot: SpeciesSnapshot,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    """Undo a delete: re-create the record under its old id."""
    if snapshot.author != user.id:
        raise HTTPException(status_code=403, detail="Only the author can restore this species")
    if db.get(Species, snapshot.id) is not None:
        raise HTTPException(status_code=409, detail="A species with this id already exists")
    sp = Species(**snapshot.model_dump())
    db.add(sp)
    commit_or_http(db, "Undo delete failed")
    db.refresh(sp)
    return _serialize_species(sp)


@router.get("/{species_id}", response_model=SpeciesOut)
def get_species(
    species_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    return _serialize_species(_get_species(db, species_id))


@router.patch("/{species_id}", response_model=SpeciesEditOut)
def update_species(
    species_id: int,
    payload: SpeciesUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    sp = _get_owned_species(db, species_id, user)
    previous = SpeciesSnapshot.model_validate(sp)

    changes = payload.model_dump(exclude_unset=True)
    for name in SPECIES_FIELDS:
        if name in changes:
            setattr(sp, name, changes[name])
    commit_or_http(db, "Failed to save changes")
    db.refresh(sp)
    return SpeciesEditOut(species=_serialize_species(sp), previous=previous)


@router.delete("/{species_id}", response_model=SpeciesSnapshot)
def delete_species(
    species_id: int,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    """Delete and hand back the full record so the client can offer undo."""
    sp = _get_owned_species(db, species_id, user)
    snapshot = SpeciesSnapshot.model_validate(sp)
    db.delete(sp)
    commit_or_http(db, "Delete failed")
    return snapshot
