# barberbook/services/catalog/catalog_service.py
"""Service catalog management (operator side)"""
import logging
import uuid
from decimal import Decimal
from typing import List, Dict, Any, Union

from sqlalchemy.orm import Session

from barberbook.core.exceptions import BookingValidationError, NotFoundError
from barberbook.models.service import Service

logger = logging.getLogger(__name__)


class CatalogService:
    """Handles service catalog operations"""

    @staticmethod
    def list_services(db: Session, include_inactive: bool = True) -> List[Service]:
        query = db.query(Service)
        if not include_inactive:
            query = query.filter(Service.active == True)
        return query.order_by(Service.price.asc(), Service.name.asc()).all()

    @staticmethod
    def get_service(db: Session, service_id: Union[str, uuid.UUID]) -> Service:
        if isinstance(service_id, str):
            try:
                service_id = uuid.UUID(service_id)
            except ValueError:
                raise NotFoundError("Service not found")

        service = db.query(Service).filter(Service.id == service_id).first()
        if not service:
            raise NotFoundError("Service not found")
        return service

    @staticmethod
    def create_service(db: Session, data: Dict[str, Any]) -> Service:
        CatalogService._check_values(data)

        service = Service(
            id=uuid.uuid4(),
            name=data["name"].strip(),
            description=data.get("description"),
            price=Decimal(str(data.get("price") or 0)),
            duration_minutes=data["duration_minutes"],
            active=data.get("active", True),
        )
        db.add(service)
        db.commit()
        db.refresh(service)

        logger.info(f"Created service {service.id}: {service.name}")
        return service

    @staticmethod
    def update_service(db: Session, service_id: Union[str, uuid.UUID], changes: Dict[str, Any]) -> Service:
        """
        Partially update a service.

        Price changes only affect future bookings; existing appointments keep
        the price they were booked at.
        """
        service = CatalogService.get_service(db, service_id)
        CatalogService._check_values(changes)

        if changes.get("name") is not None:
            service.name = changes["name"].strip()
        if "description" in changes:
            service.description = changes["description"]
        if changes.get("price") is not None:
            service.price = Decimal(str(changes["price"]))
        if changes.get("duration_minutes") is not None:
            service.duration_minutes = changes["duration_minutes"]
        if changes.get("active") is not None:
            service.active = changes["active"]

        db.commit()
        db.refresh(service)

        logger.info(f"Updated service {service.id}: {sorted(changes)}")
        return service

    @staticmethod
    def _check_values(data: Dict[str, Any]) -> None:
        if "name" in data and data["name"] is not None and not data["name"].strip():
            raise BookingValidationError("Service name cannot be empty")
        if data.get("duration_minutes") is not None and data["duration_minutes"] <= 0:
            raise BookingValidationError("Duration must be a positive number of minutes")
        if data.get("price") is not None and data["price"] < 0:
            raise BookingValidationError("Price cannot be negative")
