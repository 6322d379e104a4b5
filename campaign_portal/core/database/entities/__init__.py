"""
Database entities.

Importing this package registers every table with ``SQLModel.metadata``.
"""

from .achievements import Achievement, AchievementCategory
from .ama import AmaCategory, AmaQuestion, AmaVote
from .categories import Category
from .challenges import Challenge, ChallengeSubmission
from .complaints import Complaint
from .contacts import ContactMessage
from .emergency import EmergencyContact, EmergencyRequest
from .events import Event
from .gallery import Photo, PhotoAlbum, Video
from .media import MediaItem
from .news import NewsArticle
from .promises import Promise, PromiseCategory, PromiseUpdate
from .site_settings import SiteSetting
from .store import Order, OrderItem, Product, ProductVariant
from .testimonials import Testimonial, TestimonialCategory
from .users import User
from .voters import Voter, VoterMetadata

__all__ = [
    "Achievement",
    "AchievementCategory",
    "AmaCategory",
    "AmaQuestion",
    "AmaVote",
    "Category",
    "Challenge",
    "ChallengeSubmission",
    "Complaint",
    "ContactMessage",
    "EmergencyContact",
    "EmergencyRequest",
    "Event",
    "MediaItem",
    "NewsArticle",
    "Order",
    "OrderItem",
    "Photo",
    "PhotoAlbum",
    "Product",
    "ProductVariant",
    "Promise",
    "PromiseCategory",
    "PromiseUpdate",
    "SiteSetting",
    "Testimonial",
    "TestimonialCategory",
    "User",
    "Voter",
    "VoterMetadata",
]
