"""Services"""

from portfolio_cms.services.blog import BlogService
from portfolio_cms.services.certificates import CertificateService
from portfolio_cms.services.educations import EducationService
from portfolio_cms.services.experiences import ExperienceService
from portfolio_cms.services.projects import ProjectService
from portfolio_cms.services.site import SectionService, SettingService, SocialLinkService
from portfolio_cms.services.skills import SkillService
from portfolio_cms.services.storage import LocalStorage, StorageBackend, build_storage
from portfolio_cms.services.testimonials import TestimonialService
from portfolio_cms.services.uploads import UploadedFile, UploadPolicy

__all__ = [
    "BlogService",
    "CertificateService",
    "EducationService",
    "ExperienceService",
    "ProjectService",
    "SectionService",
    "SettingService",
    "SocialLinkService",
    "SkillService",
    "TestimonialService",
    "LocalStorage",
    "StorageBackend",
    "build_storage",
    "UploadedFile",
    "UploadPolicy",
]
