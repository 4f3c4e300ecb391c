"""Food image recognition endpoints."""

from fastapi import APIRouter, Depends, File, UploadFile, status

from calorie_tracker.api.dependencies import get_container, require_user
from calorie_tracker.api.models import ConfirmedMealRequest
from calorie_tracker.api.serializers import serialize_analysis, serialize_meal
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import UserProfile
from calorie_tracker.errors import ValidationError

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/identify-only", dependencies=[Depends(require_user)])
async def identify_only(
    food_image: UploadFile | None = File(default=None, alias="foodImage"),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Recognize the food in an uploaded image without saving it."""
    image_bytes = await _read_image(food_image, container.settings.max_upload_bytes)
    analysis = await container.meal_service.identify(image_bytes)
    return {"success": True, "analysis": serialize_analysis(analysis)}


@router.post("/analyze-image", status_code=status.HTTP_201_CREATED)
async def analyze_image(
    food_image: UploadFile | None = File(default=None, alias="foodImage"),
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Recognize the food in an uploaded image and save it as a meal."""
    image_bytes = await _read_image(food_image, container.settings.max_upload_bytes)
    meal, analysis = await container.meal_service.analyze_and_save(user, image_bytes)
    return {
        "success": True,
        "message": "Image recognized and meal saved.",
        "meal": serialize_meal(meal),
        "analysis": serialize_analysis(analysis),
    }


@router.post("/confirm", status_code=status.HTTP_201_CREATED)
async def confirm(
    body: ConfirmedMealRequest,
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Save a recognition result after the user reviewed it."""
    meal = container.meal_service.log_ai_confirmed(
        user,
        name=body.meal_name,
        calorie_count=body.calories,
        confidence=body.confidence,
        eaten_at=body.date_eaten,
    )
    return {"success": True, "message": "Meal saved.", "meal": serialize_meal(meal)}


async def _read_image(upload: UploadFile | None, max_bytes: int) -> bytes:
    if upload is None:
        raise ValidationError("No image was uploaded.")
    if not (upload.content_type or "").startswith("image/"):
        raise ValidationError("Only image files are allowed.")
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ValidationError(f"Image must be at most {max_bytes // (1024 * 1024)} MB.")
    if not data:
        raise ValidationError("The uploaded image is empty.")
    return data
