# Importer tous les modèles pour que SQLAlchemy les enregistre avant create_all()
from .edition import Edition
from .race_category import RaceCategory
from .program_item import ProgramItem
from .club_content import ClubContent
from .training_session import TrainingSession
from .committee_member import CommitteeMember
from .sponsor import Sponsor
from .faq_item import FaqItem
from .practical_info import PracticalInfo
from .contact_message import ContactMessage
from .membership_request import MembershipRequest

__all__ = [
    "Edition",
    "RaceCategory",
    "ProgramItem",
    "ClubContent",
    "TrainingSession",
    "CommitteeMember",
    "Sponsor",
    "FaqItem",
    "PracticalInfo",
    "ContactMessage",
    "MembershipRequest",
]
