"""Get personalized movie recommendations for a user."""
import azure.functions as func
import logging
import json

from moviediscovery_recommendation_service.services import (
    PersonalizedRecommendationService,
    UserNotFoundError
)

# Initialize blueprint
bp = func.Blueprint()

# Initialize service (singleton pattern)
recommendation_service = PersonalizedRecommendationService()

logger = logging.getLogger(__name__)


@bp.route(route="users/{user_id}/recommendations", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def get_user_recommendations(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get personalized recommendations for a user.

    An empty result list is a valid answer (200): it means there is nothing
    to recommend yet, not that something failed.
    """
    try:
        user_id = req.route_params.get('user_id')

        if not user_id:
            return func.HttpResponse(
                json.dumps({"error": "user_id is required"}),
                status_code=400,
                mimetype="application/json"
            )

        try:
            user_id = int(user_id)
        except ValueError:
            return func.HttpResponse(
                json.dumps({"error": "user_id must be an integer"}),
                status_code=400,
                mimetype="application/json"
            )

        try:
            response = recommendation_service.get_personalized_recommendations(user_id)
        except UserNotFoundError as e:
            return func.HttpResponse(
                json.dumps({"error": str(e)}),
                status_code=404,
                mimetype="application/json"
            )

        return func.HttpResponse(
            json.dumps(response, default=str),
            status_code=200,
            mimetype="application/json"
        )

    except Exception as e:
        logger.error(f"Error getting personalized recommendations: {str(e)}", exc_info=True)
        return func.HttpResponse(
            json.dumps({"error": "Internal server error"}),
            status_code=500,
            mimetype="application/json"
        )


# noinspection PyUnusedLocal
@bp.route(route="recommendations/settings", methods=["GET"])
def get_recommendation_settings(req: func.HttpRequest) -> func.HttpResponse:
    """Get the tuning constants the recommendation engine runs with."""
    return func.HttpResponse(
        json.dumps(recommendation_service.get_settings()),
        status_code=200,
        mimetype="application/json"
    )


# noinspection PyUnusedLocal
@bp.route(route="recommendations/health", methods=["GET"])
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint."""
    return func.HttpResponse(
        json.dumps({
            "status": "healthy",
            "service": "movie-recommendation-service",
            "version": "1.0.0"
        }),
        status_code=200,
        mimetype="application/json"
    )
