from sqlalchemy import Column, String, Boolean, Text

from app.core.database import Base
from app.core.types import id_column


class Hall(Base):
    """A hall of residence with its own mess.

    Reviews and complaints refer to halls by ``hall_code`` rather than a
    foreign key, so codes can be used before a row exists here.
    """
    __tablename__ = "halls"

    id = id_column()
    hall_code = Column(String(10), unique=True, index=True, nullable=False)
    hall_name = Column(Text, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Hall {self.hall_code}>"
