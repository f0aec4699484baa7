"""
cafehub/api/coffees.py

Purpose: Coffee endpoints

- Pass-through CRUD on the coffees collection
- Responses are the raw document or driver acknowledgment
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from motor.motor_asyncio import AsyncIOMotorCollection

from cafehub.db.mongo import get_coffees_collection
from cafehub.schemas.response import InsertAck, UpdateAck, DeleteAck
from cafehub.services import coffee_service

router = APIRouter(prefix="/coffees")


@router.post("", response_model=InsertAck)
async def create_coffee(
    document: Dict[str, Any] = Body(...),
    coffees: AsyncIOMotorCollection = Depends(get_coffees_collection),
):
    return await coffee_service.create_coffee(coffees, document)


@router.get("", response_model=List[Dict[str, Any]])
async def list_coffees(coffees: AsyncIOMotorCollection = Depends(get_coffees_collection)):
    return await coffee_service.list_coffees(coffees)


@router.get("/{coffee_id}", response_model=Optional[Dict[str, Any]])
async def get_coffee(
    coffee_id: str,
    coffees: AsyncIOMotorCollection = Depends(get_coffees_collection),
):
    """Returns the coffee, or null when the id is unknown."""
    return await coffee_service.get_coffee(coffees, coffee_id)


@router.put("/{coffee_id}", response_model=UpdateAck)
async def replace_coffee(
    coffee_id: str,
    document: Dict[str, Any] = Body(...),
    coffees: AsyncIOMotorCollection = Depends(get_coffees_collection),
):
    return await coffee_service.replace_coffee(coffees, coffee_id, document)


@router.delete("/{coffee_id}", response_model=DeleteAck)
async def delete_coffee(
    coffee_id: str,
    coffees: AsyncIOMotorCollection = Depends(get_coffees_collection),
):
    return await coffee_service.delete_coffee(coffees, coffee_id)
