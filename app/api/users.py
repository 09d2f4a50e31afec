# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import uuid

from fastapi import Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_user_service
from app.application.crud.service import CrudService
from app.application.users.service import to_user_fields
from app.common.envelope import ApiResult
from app.common.routing import AppRouter, LogAction, RouteOptions
from app.domain import models, schemas


router = AppRouter(prefix="/users", tags=["users"])


def create_user(
    req: schemas.UserCreate,
    db: Session = Depends(get_db),
    service: CrudService[models.User] = Depends(get_user_service),
):
    return service.create(db, to_user_fields(req.model_dump(exclude_none=True)))


def list_users(
    db: Session = Depends(get_db),
    service: CrudService[models.User] = Depends(get_user_service),
):
    users = [schemas.UserRead.model_validate(u) for u in service.find_all(db)]
    return ApiResult.success(users, "User list retrieved successfully")


def get_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    service: CrudService[models.User] = Depends(get_user_service),
):
    return service.find_one(db, str(user_id))


def update_user(
    user_id: uuid.UUID,
    req: schemas.UserUpdate,
    db: Session = Depends(get_db),
    service: CrudService[models.User] = Depends(get_user_service),
):
    return service.update(db, str(user_id), to_user_fields(req.model_dump(exclude_unset=True)))


def delete_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    service: CrudService[models.User] = Depends(get_user_service),
):
    return service.remove(db, str(user_id))


router.add_api_route(
    "",
    create_user,
    methods=["POST"],
    status_code=201,
    response_model=schemas.UserRead,
    summary="Create a new user",
    options=RouteOptions(
        logging=LogAction("Create user", "log"),
        response_message="User created successfully",
    ),
)
router.add_api_route(
    "",
    list_users,
    methods=["GET"],
    summary="Get all users",
    options=RouteOptions(logging=LogAction("List users", "debug")),
)
router.add_api_route(
    "/{user_id}",
    get_user,
    methods=["GET"],
    response_model=schemas.UserRead,
    summary="Get a user by id",
    options=RouteOptions(logging=LogAction("Get user by id", "debug")),
)
router.add_api_route(
    "/{user_id}",
    update_user,
    methods=["PATCH"],
    response_model=schemas.UserRead,
    summary="Update a user",
    options=RouteOptions(logging=LogAction("Update user", "log")),
)
router.add_api_route(
    "/{user_id}",
    delete_user,
    methods=["DELETE"],
    response_model=schemas.UserRead,
    summary="Delete a user",
    options=RouteOptions(logging=LogAction("Delete user", "warn")),
)
