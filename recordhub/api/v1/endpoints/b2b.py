from fastapi import APIRouter

from recordhub.api.v1.records import add_record_routes
from recordhub.services.records import families

router = APIRouter()

add_record_routes(router, "/leads", families.LEADS)
add_record_routes(router, "/invoices", families.INVOICES)
