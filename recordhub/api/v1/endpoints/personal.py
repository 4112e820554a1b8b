from fastapi import APIRouter

from recordhub.api.v1.records import add_record_routes
from recordhub.services.records import families

router = APIRouter()

add_record_routes(router, "/tasks", families.TASKS)
add_record_routes(router, "/goals", families.GOALS)
add_record_routes(router, "/mood-logs", families.MOOD_LOGS)
