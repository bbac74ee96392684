from fastapi import FastAPI, Request
import time
import uuid
from diet_engine.models import (
    AllergenInfo,
    ApplyRelaxationRequest,
    ApplyRelaxationResponse,
    CacheKeyResponse,
    DietTag,
    EngineRequest,
    ExclusionsResponse,
    RelaxationPlanResponse,
    RestrictionProfile,
    TranslateResponse,
    ValidationReport,
    VocabularyResponse,
)
from diet_engine.services.cache_keys import cache_key
from diet_engine.services.conflict_validator import conflict_validator
from diet_engine.services.exclusion_builder import build_exclusions, explain_exclusions
from diet_engine.services.query_translator import query_translator
from diet_engine.services.relaxation_planner import relaxation_planner
from diet_engine.core.logging_config import get_logger
from diet_engine.core.vocabulary import ALLERGEN_DEFINITIONS, COMMON_EXCLUSIONS

app = FastAPI(title="Dietary Restriction Engine API", version="0.1.0")
logger = get_logger(__name__)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = str(uuid.uuid4())
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000.0
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} "
        f"{duration_ms:.1f}ms request_id={request_id}"
    )
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/")
def read_root():
    return {"message": "Dietary Restriction Engine API. Visit /docs for documentation."}


@app.post("/api/translate", response_model=TranslateResponse)
def translate_query(request: EngineRequest):
    """
    Translate a restriction profile and search options into recipe API parameters.
    """
    query = query_translator.translate(request.profile, request.options)
    return TranslateResponse(
        query=query.to_params(),
        cache_key=cache_key(request.profile, request.options)
    )


@app.post("/api/exclusions", response_model=ExclusionsResponse)
def resolve_exclusions(profile: RestrictionProfile):
    """
    Resolve the full exclusion set, with the contribution of each source.
    """
    return ExclusionsResponse(
        exclusions=build_exclusions(profile),
        sources=explain_exclusions(profile)
    )


@app.post("/api/cache-key", response_model=CacheKeyResponse)
def compute_cache_key(request: EngineRequest):
    return CacheKeyResponse(cache_key=cache_key(request.profile, request.options))


@app.post("/api/validate", response_model=ValidationReport)
def validate_profile(profile: RestrictionProfile):
    """
    Report conflicts (errors) and over-restriction (warnings). Always 200.
    """
    return conflict_validator.validate(profile)


@app.post("/api/relaxations", response_model=RelaxationPlanResponse)
def plan_relaxations(request: EngineRequest):
    """
    List the relaxation steps available for a search that returned no recipes.
    """
    return RelaxationPlanResponse(
        steps=relaxation_planner.plan(request.profile, request.options)
    )


@app.post("/api/relaxations/apply", response_model=ApplyRelaxationResponse)
def apply_relaxation(request: ApplyRelaxationRequest):
    """
    Apply one relaxation step. Unknown steps return the inputs with applied=false.
    """
    applied = relaxation_planner.find_step(request.profile, request.options, request.step_id) is not None
    profile, options = relaxation_planner.apply(request.profile, request.options, request.step_id)
    return ApplyRelaxationResponse(applied=applied, profile=profile, options=options)


@app.get("/api/vocabulary", response_model=VocabularyResponse)
def get_vocabulary():
    """
    Supported diets, allergen display data and the common exclusion shortlist for preference UIs.
    """
    return VocabularyResponse(
        diets=[diet.value for diet in DietTag],
        allergens=[
            AllergenInfo(
                name=definition.name,
                display_name=definition.display_name,
                description=definition.description,
                intolerance_token=definition.intolerance_token,
                severity=definition.severity,
            )
            for definition in ALLERGEN_DEFINITIONS.values()
        ],
        common_exclusions=list(COMMON_EXCLUSIONS),
    )
