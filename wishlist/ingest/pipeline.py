"""Ordered extractor stages combined by a single fill-gaps reducer."""

import logging
from typing import List, Sequence

from wishlist.ingest.base import BaseExtractor, ProductInfo
from wishlist.ingest.document import Document
from wishlist.ingest.domains import GENERIC
from wishlist.ingest.extractors.cascade import SelectorCascadeExtractor
from wishlist.ingest.extractors.content import ContentHeuristicExtractor
from wishlist.ingest.extractors.meta import MetaTagExtractor
from wishlist.ingest.retailers import get_profile
from wishlist.metrics import record_stage_run

logger = logging.getLogger(__name__)


class ExtractionPipeline:
    """
    Run extractor stages in order until the title is satisfactory.

    The first stage always runs. Each later stage runs only while the merged
    title is still empty or domain-like, and its result only fills fields
    that are still missing.
    """

    def __init__(self, stages: Sequence[BaseExtractor]):
        if not stages:
            raise ValueError("Extraction pipeline needs at least one stage")
        self.stages: List[BaseExtractor] = list(stages)

    @property
    def stage_names(self) -> List[str]:
        return [stage.get_name() for stage in self.stages]

    async def run(self, document: Document, host: str) -> ProductInfo:
        """
        Extract product info from a loaded page.

        Args:
            document: Page view
            host: Requested hostname, used for the domain-like title test

        Returns:
            Merged ProductInfo (fields may be None)
        """
        info = ProductInfo()

        for i, stage in enumerate(self.stages):
            if i > 0 and info.has_title(host):
                break

            name = stage.get_name()
            if i > 0:
                logger.info(f"Title missing or domain-like after {i} stage(s), escalating to {name}")

            record_stage_run(name)
            result = await stage.extract(document)
            info = info.fill_gaps(result, host)

        return info


def build_pipeline(retailer: str) -> ExtractionPipeline:
    """
    Build the stage list for a classified retailer.

    Supported retailers start with their selector cascade; generic hosts
    start with the meta-tag extractor, which then is not repeated.

    Args:
        retailer: Retailer identifier or "generic"
    """
    profile = get_profile(retailer) if retailer != GENERIC else None

    stages: List[BaseExtractor] = []
    if profile is not None:
        stages.append(SelectorCascadeExtractor(profile))
    stages.append(MetaTagExtractor())
    stages.append(ContentHeuristicExtractor())

    return ExtractionPipeline(stages)
