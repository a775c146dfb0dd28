#!/usr/bin/env python3
"""
FastAPI dependencies for the weather routes

The prediction cache and classifier are created once in the app lifespan and
kept on app.state; routes receive them through Depends() so tests can
override them with app.dependency_overrides.
"""

from fastapi import Depends, Request

from app.core.logging import get_api_logger
from app.services.prediction_cache import PredictionCache
from forecast.aggregator import YearAggregator
from forecast.classifier import DayClassifier
from forecast.observers import LoggingObserver


def get_prediction_cache(request: Request) -> PredictionCache | None:
    """Cache handle built at startup, or None when caching is disabled"""
    return getattr(request.app.state, "prediction_cache", None)


def get_classifier(request: Request) -> DayClassifier:
    classifier = getattr(request.app.state, "classifier", None)
    if classifier is None:
        classifier = DayClassifier()
        request.app.state.classifier = classifier
    return classifier


def get_aggregator(
    classifier: DayClassifier = Depends(get_classifier),
    cache: PredictionCache | None = Depends(get_prediction_cache),
) -> YearAggregator:
    """New aggregator per request; observers carry per-run diagnostics"""
    observer = LoggingObserver(get_api_logger("weather.aggregator"))
    return YearAggregator(classifier, cache=cache, observer=observer)
