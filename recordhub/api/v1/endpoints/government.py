from fastapi import APIRouter

from recordhub.api.v1.records import add_record_routes
from recordhub.services.records import families

router = APIRouter()

add_record_routes(router, "/applications", families.APPLICATIONS)
add_record_routes(router, "/documents", families.DOCUMENTS)
add_record_routes(router, "/complaints", families.COMPLAINTS)
