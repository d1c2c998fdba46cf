"""Strongly typed identifiers for AEOBRO domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
ProfileId = NewType("ProfileId", UUID)
DomainClaimId = NewType("DomainClaimId", UUID)
PlatformAccountId = NewType("PlatformAccountId", UUID)
BioCodeId = NewType("BioCodeId", UUID)
ChangeLogId = NewType("ChangeLogId", UUID)
