"""
Servicio de reseñas.

Una reseña por usuario y casa. Después de cada alta, edición o
baja se recalculan las estadísticas y se copian a la casa.
"""

import math
from typing import Optional

import structlog

from safr.database import HouseRepository, KeyValueStore, ReviewRepository, get_store
from safr.models import RatingStats, Review
from safr.models.common import utcnow_iso
from safr.services.result import FailureKind, OperationResult, handles_store_errors

logger = structlog.get_logger()

# Campos que el autor puede editar
EDITABLE_FIELDS = {"rating", "title", "comment"}


def _valid_rating(rating) -> bool:
    return isinstance(rating, int) and not isinstance(rating, bool) and 1 <= rating <= 5


class ReviewService:
    """Reseñas de casas y estadísticas de rating."""

    def __init__(self, store: Optional[KeyValueStore] = None):
        store = store or get_store()
        self.review_repo = ReviewRepository(store)
        self.house_repo = HouseRepository(store)

    def get_all_reviews(self) -> list[Review]:
        return self.review_repo.get_all()

    def get_house_reviews(self, house_id: str) -> list[Review]:
        """Reseñas de una casa, más nuevas primero."""
        reviews = self.review_repo.get_by_house(house_id)
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    def get_user_reviews(self, user_id: str) -> list[Review]:
        reviews = self.review_repo.get_by_user(user_id)
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    def get_house_rating_stats(self, house_id: str) -> RatingStats:
        """
        Promedio (a un decimal, .05 hacia arriba), total y distribución
        1..5 de una casa.
        Sin reseñas devuelve todo en cero.
        """
        reviews = self.review_repo.get_by_house(house_id)
        if not reviews:
            return RatingStats()

        distribution = {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}
        for review in reviews:
            distribution[review.rating] += 1

        average = sum(r.rating for r in reviews) / len(reviews)
        return RatingStats(
            average_rating=math.floor(average * 10 + 0.5) / 10,
            total_reviews=len(reviews),
            rating_distribution=distribution,
        )

    def can_user_review(self, house_id: str, user_id: str) -> bool:
        return self.review_repo.get_by_house_and_user(house_id, user_id) is None

    def sync_house_rating(self, house_id: str) -> RatingStats:
        """Copia promedio y total de reseñas a la casa."""
        stats = self.get_house_rating_stats(house_id)
        if not self.house_repo.update_rating(
            house_id, stats.average_rating, stats.total_reviews
        ):
            logger.warning("Casa inexistente al sincronizar rating", house_id=house_id)
        return stats

    @handles_store_errors("Failed to add review")
    def add_review(
        self,
        house_id: str,
        user_id: str,
        user_name: str,
        rating: int,
        title: str = "",
        comment: str = "",
    ) -> OperationResult:
        """Agrega la reseña de un usuario; rechaza una segunda sobre la misma casa."""
        if not _valid_rating(rating):
            return OperationResult.fail(
                FailureKind.VALIDATION, "Rating must be an integer between 1 and 5"
            )

        if not self.house_repo.get_by_id(house_id):
            return OperationResult.fail(FailureKind.NOT_FOUND, "House not found")

        if not self.can_user_review(house_id, user_id):
            return OperationResult.fail(
                FailureKind.CONFLICT, "You have already reviewed this house"
            )

        review = Review(
            house_id=house_id,
            user_id=user_id,
            user_name=user_name,
            rating=rating,
            title=title,
            comment=comment,
        )
        self.review_repo.create(review)
        stats = self.sync_house_rating(house_id)
        logger.info(
            "Reseña creada",
            house_id=house_id,
            user_id=user_id,
            rating=rating,
            average=stats.average_rating,
        )
        return OperationResult.ok(
            "Review added successfully", review_id=review.id, stats=stats
        )

    @handles_store_errors("Failed to update review")
    def update_review(
        self, review_id: str, user_id: Optional[str] = None, **updates
    ) -> OperationResult:
        """
        Edita rating, título o comentario.

        Si se pasa `user_id`, solo el autor puede editarla.
        """
        review = self.review_repo.get_by_id(review_id)
        if not review:
            return OperationResult.fail(FailureKind.NOT_FOUND, "Review not found")
        if user_id is not None and review.user_id != user_id:
            return OperationResult.fail(
                FailureKind.AUTHORIZATION, "You can only edit your own reviews"
            )

        unknown = set(updates) - EDITABLE_FIELDS
        if unknown:
            return OperationResult.fail(
                FailureKind.VALIDATION,
                f"Cannot update fields: {', '.join(sorted(unknown))}",
            )
        if "rating" in updates and not _valid_rating(updates["rating"]):
            return OperationResult.fail(
                FailureKind.VALIDATION, "Rating must be an integer between 1 and 5"
            )

        updated = review.model_copy(update={**updates, "updated_at": utcnow_iso()})
        self.review_repo.update(updated)
        stats = self.sync_house_rating(review.house_id)
        return OperationResult.ok("Review updated successfully", stats=stats)

    @handles_store_errors("Failed to delete review")
    def delete_review(self, review_id: str, user_id: str) -> OperationResult:
        """Borra una reseña; solo su autor puede hacerlo."""
        review = self.review_repo.get_by_id(review_id)
        if not review:
            return OperationResult.fail(FailureKind.NOT_FOUND, "Review not found")
        if review.user_id != user_id:
            return OperationResult.fail(
                FailureKind.AUTHORIZATION, "You can only delete your own reviews"
            )

        self.review_repo.delete(review_id)
        stats = self.sync_house_rating(review.house_id)
        return OperationResult.ok("Review deleted successfully", stats=stats)
