"""
Register Raw Material Use Case.

Adds a thread type to the catalog.
"""

from aurora.application.dto.requests import CreateRawMaterialRequest
from aurora.config import get_logger
from aurora.core.entities.actor import Actor
from aurora.core.entities.raw_material import RawMaterial
from aurora.core.exceptions import ValidationError
from aurora.core.services.optimistic import OptimisticExecutor

logger = get_logger(__name__)


class RegisterRawMaterialUseCase:
    """Register a raw material with a unique material code."""

    def __init__(self, executor: OptimisticExecutor | None = None):
        self._executor = executor

    async def _get_executor(self) -> OptimisticExecutor:
        if self._executor is None:
            from aurora.application.services import get_executor

            self._executor = await get_executor()
        return self._executor

    async def execute(self, request: CreateRawMaterialRequest, actor: Actor) -> RawMaterial:
        executor = await self._get_executor()

        code = request.material_code.strip().upper()
        existing = await executor.find(RawMaterial, {"materialCode": code}, limit=1)
        if existing:
            raise ValidationError("material_code", "already registered", code)

        material = await executor.create(
            RawMaterial(
                material_code=code,
                name=request.name.strip(),
                type=request.type,
                color=request.color,
                weight=request.weight,
                cost_per_kg=request.cost_per_kg,
                supplier=request.supplier,
                min_order_qty=request.min_order_qty,
                created_by=actor.user_id,
            )
        )
        logger.info(
            "raw_material_registered",
            material_id=material.id,
            material_code=material.material_code,
            created_by=actor.user_id,
        )
        return material
