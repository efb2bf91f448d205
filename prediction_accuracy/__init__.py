"""
Prediction Accuracy Root Module

Accuracy-evaluation and experimentation engine for batch-pipeline health
predictions: outcome reconciliation, classification quality, confidence
calibration, A/B comparison and drift feedback.

Layer Structure:
- Domain: Core business logic, entities and numeric services
- Application: Use cases and DTOs
- Infrastructure: MongoDB, Celery and dependency health implementations
- Presentation: Controllers for the REST API
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, application entry point and configuration
"""
