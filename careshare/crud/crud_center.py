"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

from careshare.config import settings
from careshare.db.store import DocumentStore
from careshare.schemas import schemas


def get_center(store: DocumentStore, center_id: int):
    return store.get("centers", center_id)


def get_centers(store: DocumentStore, skip: int = 0, limit: int = 100):
    return store.query("centers", order_by="name", offset=skip, limit=limit)


def create_center(store: DocumentStore, center: schemas.CenterCreate, created_by: int):
    fields = center.model_dump()
    if fields["radius"] is None:
        fields["radius"] = settings.default_center_radius_m
    fields["created_by"] = created_by
    return store.insert("centers", fields)


def update_center(store: DocumentStore, center_id: int, center: schemas.CenterCreate):
    fields = center.model_dump(exclude_unset=True)
    if fields.get("radius", 0) is None:
        fields["radius"] = settings.default_center_radius_m
    return store.update("centers", center_id, fields)


def delete_center(store: DocumentStore, center_id: int):
    return store.delete("centers", center_id)
