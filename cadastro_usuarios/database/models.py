"""SQLAlchemy database models for cadastro-usuarios."""

from sqlalchemy import Column, Integer, String

from cadastro_usuarios.database.database import Base


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    # Primary key, generated by the store on insert
    id = Column(Integer, primary_key=True, autoincrement=True)

    # No uniqueness or format rule on email
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    age = Column(Integer, nullable=False)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from cadastro_usuarios.models.user import User
        return User(
            id=self.id,
            email=self.email,
            name=self.name,
            age=self.age,
        )

    @classmethod
    def from_pydantic(cls, user):
        """Create database model from a UserIn (id is left to the store)."""
        return cls(
            email=user.email,
            name=user.name,
            age=user.age,
        )
