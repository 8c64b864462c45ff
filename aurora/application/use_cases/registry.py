"""
Registry use cases: clients, contractors, workers and products.

Contractor and worker codes come from the sequence generator; client and
product codes are chosen by the caller and must be unique.
"""

from aurora.application.dto.requests import (
    CreateClientRequest,
    CreateContractorRequest,
    CreateProductRequest,
    CreateWorkerRequest,
)
from aurora.config import get_logger
from aurora.core.entities.actor import Actor
from aurora.core.entities.client import Client
from aurora.core.entities.contractor import Contractor, Worker
from aurora.core.entities.product import Product, SizeConfig
from aurora.core.entities.raw_material import RawMaterial
from aurora.core.exceptions import NotFoundError, ValidationError
from aurora.core.services.optimistic import OptimisticExecutor
from aurora.core.services.sequences import CodeKind, SequenceGenerator

logger = get_logger(__name__)


class RegistryUseCase:
    """Shared wiring for registry operations."""

    def __init__(
        self,
        executor: OptimisticExecutor | None = None,
        sequences: SequenceGenerator | None = None,
    ):
        self._executor = executor
        self._sequences = sequences

    async def _get_executor(self) -> OptimisticExecutor:
        if self._executor is None:
            from aurora.application.services import get_executor

            self._executor = await get_executor()
        return self._executor

    async def _get_sequences(self) -> SequenceGenerator:
        if self._sequences is None:
            from aurora.application.services import get_sequence_generator

            self._sequences = await get_sequence_generator()
        return self._sequences


class RegisterClientUseCase(RegistryUseCase):
    """Register a client with a unique client code."""

    async def execute(self, request: CreateClientRequest, actor: Actor) -> Client:
        executor = await self._get_executor()

        code = request.client_code.strip().upper()
        if await executor.find(Client, {"clientCode": code}, limit=1):
            raise ValidationError("client_code", "already registered", code)

        client = await executor.create(
            Client(
                client_code=code,
                created_by=actor.user_id,
                **request.model_dump(exclude={"client_code"}),
            )
        )
        logger.info("client_registered", client_id=client.id, client_code=code)
        return client


class RegisterContractorUseCase(RegistryUseCase):
    """Onboard a contractor under the next CONT code."""

    async def execute(self, request: CreateContractorRequest, actor: Actor) -> Contractor:
        executor = await self._get_executor()
        sequences = await self._get_sequences()

        contractor = Contractor(
            onboarded_by=actor.user_id,
            **request.model_dump(),
        )
        contractor.contractor_code = await sequences.next_code(CodeKind.CONTRACTOR)
        contractor = await executor.create(contractor)
        logger.info(
            "contractor_registered",
            contractor_id=contractor.id,
            contractor_code=contractor.contractor_code,
            onboarded_by=actor.user_id,
        )
        return contractor


class RegisterWorkerUseCase(RegistryUseCase):
    """Register a worker under an active contractor with the next WRK code."""

    async def execute(self, request: CreateWorkerRequest, actor: Actor) -> Worker:
        executor = await self._get_executor()
        sequences = await self._get_sequences()

        try:
            contractor = await executor.get(Contractor, request.contractor_id)
        except NotFoundError as e:
            raise ValidationError(
                "contractor_id", "no such contractor", request.contractor_id
            ) from e
        if not contractor.can_take_work:
            raise ValidationError(
                "contractor_id", f"contractor is {contractor.status.value}", contractor.id
            )

        worker = Worker(**request.model_dump())
        worker.worker_code = await sequences.next_code(CodeKind.WORKER)
        worker = await executor.create(worker)
        logger.info(
            "worker_registered",
            worker_id=worker.id,
            worker_code=worker.worker_code,
            contractor_id=worker.contractor_id,
            registered_by=actor.user_id,
        )
        return worker


class RegisterProductUseCase(RegistryUseCase):
    """Add a product whose size configs reference known raw materials."""

    async def execute(self, request: CreateProductRequest, actor: Actor) -> Product:
        executor = await self._get_executor()

        code = request.product_code.strip().upper()
        if await executor.find(Product, {"productCode": code}, limit=1):
            raise ValidationError("product_code", "already registered", code)

        sizes = [config.size for config in request.size_config]
        if len(sizes) != len(set(sizes)):
            raise ValidationError("size_config", "each size may appear once", sizes)

        material_ids = {
            requirement.raw_material_id
            for config in request.size_config
            for requirement in config.thread_requirements
        }
        for material_id in sorted(material_ids):
            try:
                await executor.get(RawMaterial, material_id)
            except NotFoundError as e:
                raise ValidationError(
                    "size_config", "unknown raw material", material_id
                ) from e

        product = await executor.create(
            Product(
                product_code=code,
                name=request.name.strip(),
                category=request.category,
                model=request.model,
                description=request.description,
                colors=request.colors,
                size_config=[SizeConfig(**config.model_dump()) for config in request.size_config],
                created_by=actor.user_id,
            )
        )
        logger.info(
            "product_registered",
            product_id=product.id,
            product_code=code,
            sizes=len(product.size_config),
        )
        return product
