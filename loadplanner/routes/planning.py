from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from loadplanner import schemas, utils
from loadplanner.config import PlannerConfig, get_config
from loadplanner.importer import UnsupportedFileError, load_cargo_file
from loadplanner.logger import logger
from loadplanner.model.catalog import get_catalog, get_truck_by_id, get_trucks_by_category
from loadplanner.model.entities import InvalidItemError, TrailerCategory, UnknownTruckError
from loadplanner.model.evaluator import rank_trucks
from loadplanner.model.replan import replan_load
from loadplanner.model.report import plan_summary
from loadplanner.model.solver import plan_loads

router = APIRouter(tags=["Planning"])


def _plan_response(plan) -> schemas.PlanResponse:
    return schemas.PlanResponse(
        plan=schemas.PlanSchema.model_validate(plan),
        summary=plan_summary(plan),
    )


@router.get("/trucks/", response_model=list[schemas.TruckTypeSchema])
def read_trucks(category: Optional[TrailerCategory] = None):
    trucks = get_catalog() if category is None else get_trucks_by_category(category)
    return [schemas.TruckTypeSchema.model_validate(truck) for truck in trucks]


@router.post("/recommend/", response_model=list[schemas.TruckRecommendationSchema])
def recommend_trucks(item: schemas.CargoItemSchema, config: PlannerConfig = Depends(get_config)):
    try:
        recommendations = rank_trucks(utils.convert_item(item), config=config)
        return [schemas.TruckRecommendationSchema.model_validate(rec) for rec in recommendations]
    except InvalidItemError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception(f"Error ranking trucks: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("/plan/", response_model=schemas.PlanResponse)
def create_plan(payload: schemas.PlanRequest, config: PlannerConfig = Depends(get_config)):
    logger.info(f"plan request: {len(payload.items)} item(s)")
    try:
        catalog = utils.resolve_catalog(payload.truck_ids)
        items = [utils.convert_item(item) for item in payload.items]
        plan = plan_loads(items, catalog=catalog, config=config, rebalance=payload.rebalance)
        return _plan_response(plan)
    except UnknownTruckError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidItemError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception(f"Error planning loads: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("/plan/upload/", response_model=schemas.PlanResponse)
async def upload_plan(file: UploadFile = File(...), config: PlannerConfig = Depends(get_config)):
    try:
        items = load_cargo_file(file.file, file.filename)
        plan = plan_loads(items, config=config)
        return _plan_response(plan)
    except UnsupportedFileError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidItemError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception(f"Error uploading cargo list: {e}")
        raise HTTPException(status_code=500, detail="Failed to plan uploaded cargo list")


@router.post("/replan/", response_model=schemas.ReplanResponse)
def replan(payload: schemas.ReplanRequest, config: PlannerConfig = Depends(get_config)):
    logger.info(f"replan request: load {payload.load_index} -> {payload.truck_id}")
    try:
        truck = get_truck_by_id(payload.truck_id)
        result = replan_load(utils.convert_plan(payload.plan), payload.load_index, truck, config)
        return schemas.ReplanResponse(
            plan=schemas.PlanSchema.model_validate(result.plan),
            split_occurred=result.split_occurred,
            new_load_count=result.new_load_count,
            unfit_items=[schemas.CargoItemSchema.model_validate(item) for item in result.unfit_items],
            summary=plan_summary(result.plan),
        )
    except UnknownTruckError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidItemError, IndexError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception(f"Error replanning load: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")
