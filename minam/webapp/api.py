"""REST API blueprint exposing the registry, pipeline and product routes."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from minam.models import (AnalyzeRequest, DatasetCreate, ModelProfileCreate,
                          PipelineRunRequest, ProviderCreate, PublishRequest)
from minam.pipeline import ErrorCategory
from minam.services import AnalysisError, HeuristicFileAnalyzer, ProductQuery

from . import get_analyzer, get_service

api_bp = Blueprint("api", __name__)

_PUBLISH_STATUS = {
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.VALIDATION_FAILED: 400,
    ErrorCategory.POLICY_REJECTED: 409,
}


def _json_error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _json_body():
    return request.get_json(silent=True)


@api_bp.get("/health")
def healthcheck():
    """Simple readiness probe used by tests or deployment."""
    return "ok", 200


# ----------------------------------------------------------------------
# Providers, model profiles, datasets
# ----------------------------------------------------------------------
@api_bp.post("/api/providers")
def create_provider():
    try:
        payload = ProviderCreate.from_mapping(_json_body())
    except ValueError as exc:
        return _json_error(str(exc), 400)
    provider = get_service().register_provider(payload)
    return jsonify(provider.to_dict()), 200


@api_bp.get("/api/providers")
def list_providers():
    providers = get_service().list_providers()
    return jsonify([provider.to_dict() for provider in providers]), 200


@api_bp.post("/api/models")
def create_model():
    try:
        payload = ModelProfileCreate.from_mapping(_json_body())
    except ValueError as exc:
        return _json_error(str(exc), 400)
    profile = get_service().register_model_profile(payload)
    return jsonify(profile.to_dict()), 200


@api_bp.get("/api/models")
def list_models():
    profiles = get_service().list_model_profiles()
    return jsonify([profile.to_dict() for profile in profiles]), 200


@api_bp.post("/api/datasets")
def create_dataset():
    try:
        payload = DatasetCreate.from_mapping(_json_body())
    except ValueError as exc:
        return _json_error(str(exc), 400)
    dataset = get_service().register_dataset(payload)
    return jsonify(dataset.to_dict()), 200


@api_bp.get("/api/datasets")
def list_datasets():
    datasets = get_service().list_datasets()
    return jsonify([dataset.to_dict() for dataset in datasets]), 200


@api_bp.get("/api/datasets/<dataset_id>/preview")
def preview_dataset(dataset_id: str):
    """First rows of a dataset; unknown ids return an empty array."""
    return jsonify(get_service().preview_dataset(dataset_id)), 200


# ----------------------------------------------------------------------
# Pipeline and proposals
# ----------------------------------------------------------------------
@api_bp.post("/api/pipelines")
def run_pipeline():
    """Validate -> map -> evaluate -> store proposal.

    Resolution failures are reported in the ``error`` field of the result
    envelope rather than through the HTTP status.
    """
    try:
        payload = PipelineRunRequest.from_mapping(_json_body())
    except ValueError as exc:
        return _json_error(str(exc), 400)
    outcome = get_service().run_pipeline(
        payload.dataset_id, payload.model_profile_id, payload.min_coverage
    )
    return jsonify(outcome.to_dict()), 200


@api_bp.get("/api/proposals/<proposal_id>")
def get_proposal(proposal_id: str):
    proposal = get_service().get_proposal(proposal_id)
    if proposal is None:
        return _json_error("proposal not found", 404)
    return jsonify(proposal.to_dict()), 200


# ----------------------------------------------------------------------
# Published products
# ----------------------------------------------------------------------
@api_bp.get("/api/apis")
def list_apis():
    products = get_service().list_products()
    return jsonify([product.to_dict() for product in products]), 200


@api_bp.post("/api/apis")
def create_api():
    """Publish a proposal as a live product (requires an approval note)."""
    try:
        payload = PublishRequest.from_mapping(_json_body())
    except ValueError as exc:
        return _json_error(str(exc), 400)
    outcome = get_service().publish(payload)
    if outcome.error is not None:
        return _json_error(outcome.error.value, _PUBLISH_STATUS[outcome.error.category])
    return jsonify(outcome.product.to_dict()), 200


@api_bp.post("/v1/data/<api_id>/query")
def query_api(api_id: str):
    """Consumer query endpoint: filters the product's rows by simple params.

    An empty body means no filters; a body that is not valid JSON is a 400.
    """
    body = _json_body()
    if body is None and request.get_data():
        return _json_error("Request body must be valid JSON.", 400)
    try:
        query = ProductQuery.from_mapping(body)
    except ValueError as exc:
        return _json_error(str(exc), 400)
    return jsonify(get_service().query_product(api_id, query)), 200


# ----------------------------------------------------------------------
# File upload and LLM analysis
# ----------------------------------------------------------------------
@api_bp.post("/api/upload")
def upload_file():
    upload = request.files.get("file")
    if upload is None:
        return _json_error("No file uploaded", 400)
    content = upload.read()
    if not content:
        return _json_error("No file uploaded", 400)

    record = get_service().store_file(
        filename=upload.filename or "unknown",
        file_type=upload.mimetype or "application/octet-stream",
        content=content,
    )
    analysis = HeuristicFileAnalyzer().analyze(record.metadata())
    return jsonify(
        {
            "file_id": record.id,
            "filename": record.filename,
            "file_size": record.file_size,
            "file_type": record.file_type,
            "analysis": analysis,
        }
    ), 200


@api_bp.post("/api/analyze")
def analyze_with_llm():
    try:
        payload = AnalyzeRequest.from_mapping(_json_body())
    except ValueError as exc:
        return _json_error(str(exc), 400)
    record = get_service().get_file(payload.file_id)
    if record is None:
        return _json_error("File not found", 404)
    try:
        analysis = get_analyzer().analyze(record.metadata(), model=payload.model)
    except AnalysisError as exc:
        return _json_error(f"Analysis failed: {exc}", 502)
    return jsonify(
        {
            "analysis": analysis,
            "api_specification": None,
            "success": True,
            "error": None,
        }
    ), 200


@api_bp.post("/api/generate-spec")
def generate_api_specification():
    body = _json_body()
    if not isinstance(body, dict) or not isinstance(body.get("analysis"), dict):
        return _json_error("analysis object is required.", 400)
    model = body.get("model")
    if model is not None and not isinstance(model, str):
        return _json_error("model must be a string.", 400)
    try:
        specification = get_analyzer().generate_specification(
            body["analysis"], model=model or None
        )
    except AnalysisError as exc:
        return _json_error(f"Specification generation failed: {exc}", 502)
    return jsonify({"specification": specification, "success": True, "error": None}), 200
