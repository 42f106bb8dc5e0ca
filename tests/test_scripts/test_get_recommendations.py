"""
Tests for scripts/get_recommendations.py
"""

from unittest.mock import patch

import pytest

from moviediscovery_recommendation_service.services import UserNotFoundError
from scripts.get_recommendations import main, print_recommendations


class TestPrintRecommendations:
    """Tests for print_recommendations function."""

    def test_print_recommendations_logs_titles(self, caplog, sample_movie_details):
        """Test each recommendation is logged with its rank."""
        response = {'user_id': 1, 'results': [sample_movie_details], 'total_results': 1}

        with caplog.at_level("INFO"):
            print_recommendations(response)

        assert "Recommendations for user 1 (1)" in caplog.text
        assert "1. The Matrix (id: 603, rating: 8.2)" in caplog.text

    def test_print_recommendations_empty(self, caplog):
        """Test an empty result is reported."""
        with caplog.at_level("INFO"):
            print_recommendations({'user_id': 1, 'results': [], 'total_results': 0})

        assert "No recommendations available" in caplog.text


class TestMain:
    """Tests for main function."""

    @patch('scripts.get_recommendations.PersonalizedRecommendationService')
    def test_main_runs_engine_for_user(self, mock_service_class, mock_sys_argv):
        """Test main requests recommendations for the given user."""
        mock_sys_argv(['get_recommendations.py', '--user-id', '42'])
        mock_service = mock_service_class.return_value
        mock_service.get_personalized_recommendations.return_value = {
            'user_id': 42, 'results': [], 'total_results': 0
        }

        main()

        mock_service.get_personalized_recommendations.assert_called_once_with(42)

    @patch('scripts.get_recommendations.PersonalizedRecommendationService')
    def test_main_overrides_max_results(self, mock_service_class, mock_sys_argv):
        """Test --max-results replaces the configured cap."""
        mock_sys_argv(['get_recommendations.py', '--user-id', '42', '--max-results', '5'])
        mock_service_class.return_value.get_personalized_recommendations.return_value = {
            'user_id': 42, 'results': [], 'total_results': 0
        }

        main()

        settings = mock_service_class.call_args.kwargs['settings']
        assert settings.max_results == 5
        assert settings.high_rating_threshold == 4

    @patch('scripts.get_recommendations.PersonalizedRecommendationService')
    def test_main_exits_for_unknown_user(self, mock_service_class, mock_sys_argv):
        """Test main exits with status 1 for an unknown user."""
        mock_sys_argv(['get_recommendations.py', '--user-id', '99'])
        mock_service_class.return_value.get_personalized_recommendations.side_effect = UserNotFoundError(99)

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1

    @patch('scripts.get_recommendations.PersonalizedRecommendationService')
    def test_main_exits_on_error(self, mock_service_class, mock_sys_argv):
        """Test main exits with status 1 when the engine fails."""
        mock_sys_argv(['get_recommendations.py', '--user-id', '1'])
        mock_service_class.return_value.get_personalized_recommendations.side_effect = Exception("boom")

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1

    def test_main_requires_user_id(self, mock_sys_argv):
        """Test argparse rejects a missing --user-id."""
        mock_sys_argv(['get_recommendations.py'])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 2

    def test_main_rejects_non_positive_max_results(self, mock_sys_argv):
        """Test argparse rejects a --max-results below 1."""
        mock_sys_argv(['get_recommendations.py', '--user-id', '1', '--max-results', '0'])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 2
