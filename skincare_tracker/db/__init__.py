"""Database layer for the skincare tracker."""
