from sqlalchemy import Column, String, Integer, BigInteger
from .base import Base


class Attachment(Base):
    """
    A binary attachment of a migrated log.

    The payload itself lives in the data store; this row keeps the
    data store identifiers of the original file and of its thumbnail.
    """
    __tablename__ = 'attachment'

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Data store identifier of the original payload
    file_id = Column(String(1024), nullable=False)

    # Data store identifier of the derived thumbnail (images only)
    thumbnail_id = Column(String(1024), nullable=True)

    content_type = Column(String(255), nullable=True)

    # Owners
    project_id = Column(BigInteger, nullable=True)
    launch_id = Column(BigInteger, nullable=True)
    item_id = Column(BigInteger, nullable=True)

    def __repr__(self):
        return f"<Attachment(id={self.id}, file_id='{self.file_id}', content_type='{self.content_type}')>"
