"""
models/file.py
--------------
Uploaded file metadata. The bytes live in the object store; file_url is the
"/objects/..." path served by the download proxy.

deal_room_assets.file_id has no cascade: FileService refuses to delete a
file that is still placed in any room.
"""

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from dealhub.db.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin


class File(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "files"

    file_name: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    file_type: Mapped[str] = mapped_column(String(50), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)

    uploaded_by_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id"), nullable=False
    )
    organization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<File id={self.id} name={self.file_name}>"
