"""Tests for thread inventory entities."""

from aurora.core.entities import (
    Document,
    MovementType,
    StockMovement,
    ThreadInventoryLot,
)


class TestThreadInventoryLot:
    def test_available_is_stock_minus_allocated(self):
        lot = ThreadInventoryLot(raw_material_id="m1", current_stock_kg=100, allocated_kg=30)
        assert lot.available_kg == 70

    def test_available_rounded_to_grams(self):
        lot = ThreadInventoryLot(raw_material_id="m1", current_stock_kg=0.3, allocated_kg=0.1)
        assert lot.available_kg == 0.2

    def test_total_value(self):
        lot = ThreadInventoryLot(raw_material_id="m1", current_stock_kg=12.5, cost_per_kg=8.5)
        assert lot.total_value == 106.25

    def test_to_data_uses_stored_field_names(self):
        lot = ThreadInventoryLot(
            id="lot1", version=3, raw_material_id="m1", current_stock_kg=10, allocated_kg=4
        )
        data = lot.to_data()
        assert data["rawMaterialId"] == "m1"
        assert data["currentStockKg"] == 10
        assert data["availableKg"] == 6
        assert data["alerts"] == {"lowStock": False, "nearExpiry": False, "overstock": False}
        # Metadata belongs to the document, not the body
        assert "id" not in data
        assert "version" not in data

    def test_from_document_ignores_stale_projections(self):
        doc = Document(
            id="lot1",
            collection="threadInventory",
            version=2,
            data={
                "rawMaterialId": "m1",
                "currentStockKg": 50,
                "allocatedKg": 20,
                "availableKg": 999,
            },
        )
        lot = ThreadInventoryLot.from_document(doc)
        assert lot.id == "lot1"
        assert lot.version == 2
        assert lot.available_kg == 30

    def test_movement_round_trip_keeps_short_keys(self):
        movement = StockMovement(
            movement_type=MovementType.ALLOCATED,
            quantity=5,
            order_id="o1",
            performed_by="emp-1",
        )
        lot = ThreadInventoryLot(raw_material_id="m1", stock_movements=[movement])
        stored = lot.to_data()["stockMovements"][0]
        assert stored["type"] == "ALLOCATED"
        assert "date" in stored
        assert stored["performedBy"] == "emp-1"

        restored = ThreadInventoryLot.model_validate(lot.to_data())
        assert restored.stock_movements[0] == movement

    def test_movements_of(self):
        lot = ThreadInventoryLot(
            raw_material_id="m1",
            stock_movements=[
                StockMovement(movement_type=MovementType.IN, quantity=10, performed_by="a"),
                StockMovement(movement_type=MovementType.ALLOCATED, quantity=4, performed_by="a"),
            ],
        )
        assert [m.quantity for m in lot.movements_of(MovementType.ALLOCATED)] == [4]

    def test_needs_reorder(self):
        lot = ThreadInventoryLot(raw_material_id="m1", current_stock_kg=5, reorder_point_kg=5)
        assert lot.needs_reorder is True
