"""Creating and listing pickup points."""

from __future__ import annotations

from typing import Any, Protocol

from pvzservice.model import PVZ, CreatePvzParam, GetPvzParam, ModeratorOnlyError, Role


class PvzRepo(Protocol):
    def create(self, ctx: Any, pvz: PVZ) -> PVZ: ...

    def get_all_pvz_list(self, ctx: Any) -> list[PVZ]: ...

    def get_pvz(self, ctx: Any, param: GetPvzParam) -> list[PVZ]: ...


class PvzUseCase:
    """Pickup-point operations."""

    def __init__(self, pvz_repo: PvzRepo) -> None:
        self._pvzs = pvz_repo

    def create(self, ctx: Any, param: CreatePvzParam) -> PVZ:
        """Register a pickup point; only moderators may."""
        if param.creator_role is not Role.MODERATOR:
            raise ModeratorOnlyError()
        return self._pvzs.create(
            ctx,
            PVZ(id=param.id, registration_date=param.registration_date, city=param.city),
        )

    def get_all_pvz_list(self, ctx: Any) -> list[PVZ]:
        return self._pvzs.get_all_pvz_list(ctx)

    def get_pvz(self, ctx: Any, param: GetPvzParam) -> list[PVZ]:
        return self._pvzs.get_pvz(ctx, param)