# ABOUTME: Metadata package for the bibliographic fields lexepub reports.
# ABOUTME: Exports the EpubInfo dataclass.

from lexepub.metadata.types import EpubInfo

__all__ = ["EpubInfo"]
