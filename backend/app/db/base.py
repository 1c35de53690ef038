from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.user import User  # noqa: F401
from backend.app.models.linking_code import LinkingCode  # noqa: F401
from backend.app.models.parent_link import ParentStudentLink  # noqa: F401
from backend.app.models.audit_log import AuditLog  # noqa: F401
