"""Pydantic schemas for the RentEase API."""

from rentease.schemas.auth import *
from rentease.schemas.property import *
from rentease.schemas.tenant import *
from rentease.schemas.rent_payment import *
from rentease.schemas.maintenance import *
from rentease.schemas.dashboard import *
