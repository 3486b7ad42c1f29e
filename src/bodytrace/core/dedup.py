"""Removal of contours that trace the same edge twice.

The boundary tracer often produces two nearly coincident contours for one
silhouette edge, seen once from each side of a thin ambiguity ring. This
module pairs such contours using bounding-box IoU only, keeps the first
contour of each pair and discards the second.

Contours that never find a partner are handled according to the
SingletonPolicy: DROP treats them as noise, KEEP lets them through.
"""

import logging
from collections.abc import Sequence

from bodytrace.config import SingletonPolicy
from bodytrace.core.geometry import bounding_box_iou
from bodytrace.domain import Contour

logger = logging.getLogger(__name__)

DEFAULT_OVERLAP_THRESHOLD = 0.7


class ContourDeduplicator:
    """Pairs near-identical contours and keeps one per pair.

    Example:
        dedup = ContourDeduplicator(overlap_threshold=0.7)
        survivors = dedup.deduplicate(contours)
    """

    def __init__(
        self,
        overlap_threshold: float = DEFAULT_OVERLAP_THRESHOLD,
        singleton_policy: SingletonPolicy = SingletonPolicy.DROP,
    ) -> None:
        """Initialize the deduplicator.

        Args:
            overlap_threshold: IoU above which two contours form a pair
            singleton_policy: What to do with contours that never pair
        """
        self.overlap_threshold = overlap_threshold
        self.singleton_policy = SingletonPolicy(singleton_policy)

    def find_pairs(self, contours: Sequence[Contour]) -> list[tuple[int, int]]:
        """Find duplicate pairs in extraction order.

        For each contour i not yet paired, the first later unpaired contour
        j whose bounding-box IoU exceeds the threshold becomes its partner.

        Args:
            contours: Contours in extraction order

        Returns:
            List of (kept_index, removed_index) pairs
        """
        boxes = [contour.bounding_box() if len(contour) else None for contour in contours]
        paired = [False] * len(contours)
        pairs: list[tuple[int, int]] = []

        for i, box_i in enumerate(boxes):
            if paired[i] or box_i is None:
                continue
            for j in range(i + 1, len(contours)):
                box_j = boxes[j]
                if paired[j] or box_j is None:
                    continue
                if bounding_box_iou(box_i, box_j) > self.overlap_threshold:
                    paired[i] = paired[j] = True
                    pairs.append((i, j))
                    break

        return pairs

    def deduplicate(self, contours: Sequence[Contour]) -> list[Contour]:
        """Remove duplicate contours.

        Args:
            contours: Contours in extraction order

        Returns:
            Surviving contours in their original order
        """
        pairs = self.find_pairs(contours)
        kept = {i for i, _ in pairs}
        removed = {j for _, j in pairs}

        survivors: list[Contour] = []
        for index, contour in enumerate(contours):
            if index in kept:
                survivors.append(contour)
            elif index not in removed and self.singleton_policy is SingletonPolicy.KEEP:
                survivors.append(contour)

        logger.debug(
            "Deduplicated %d contours into %d (%d pairs, singletons %s)",
            len(contours),
            len(survivors),
            len(pairs),
            self.singleton_policy.value,
        )
        return survivors
