from app.schemas.base import CamelModel


class HallResponse(CamelModel):
    id: str
    hall_code: str
    hall_name: str
    is_active: bool
