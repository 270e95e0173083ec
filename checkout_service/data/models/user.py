from sqlalchemy import Column, Integer, String

from checkout_service.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String(20), nullable=True)
    tax_id = Column(String(20), nullable=True)
