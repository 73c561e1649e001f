"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from signature_studio.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    domain = Column(String(255), unique=True, nullable=False, index=True)
    plan = Column(String(20), nullable=False, default="starter")
    max_users = Column(Integer)
    max_templates = Column(Integer)
    max_storage_mb = Column(Integer)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    users = relationship("User", back_populates="tenant")


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="member")
    first_name = Column(String(50))
    last_name = Column(String(50))
    title = Column(String(100))
    department = Column(String(100))
    token_version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    tenant = relationship("Tenant", back_populates="users")


class SignatureTemplate(Base):
    __tablename__ = "signature_templates"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    # RESTRICT: authors cannot be removed while their templates exist
    created_by = Column(String(36), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    content = Column(Text, nullable=False, default="{}")
    formatting = Column(String(30), nullable=False, default="modern")
    custom_styles = Column(Text)
    html_content = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="draft")
    is_default = Column(Boolean, nullable=False, default=False)
    is_shared = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    author = relationship("User")
    versions = relationship(
        "SignatureTemplateVersion",
        back_populates="template",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class SignatureTemplateVersion(Base):
    __tablename__ = "signature_template_versions"
    __table_args__ = (UniqueConstraint("template_id", "version", name="uq_template_version"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    template_id = Column(
        String(36),
        ForeignKey("signature_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    version = Column(Integer, nullable=False)
    name = Column(String(100), nullable=False)
    html_content = Column(Text, nullable=False)
    created_by = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    template = relationship("SignatureTemplate", back_populates="versions")


class TemplateAssignment(Base):
    __tablename__ = "template_assignments"
    __table_args__ = (UniqueConstraint("user_id", "template_id", name="uq_assignment_user_template"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    template_id = Column(
        String(36),
        ForeignKey("signature_templates.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    assigned_by = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", foreign_keys=[user_id])
    template = relationship("SignatureTemplate")


class Asset(Base):
    __tablename__ = "assets"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    uploaded_by = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), index=True)
    name = Column(String(255), nullable=False)
    filename = Column(String(255), nullable=False)
    mime_type = Column(String(100), nullable=False)
    size = Column(Integer, nullable=False)
    url = Column(String(500), nullable=False)
    type = Column(String(20), nullable=False, default="image")
    description = Column(Text)
    checksum_sha256 = Column(String(64), nullable=False)
    storage_path = Column(String(500), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), index=True)
    action = Column(String(20), nullable=False)
    entity_type = Column(String(30), nullable=False)
    entity_id = Column(String(36))
    details = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
