from clinimpact.server.audit import AuditEntry, AuditLog
from clinimpact.server.tools import ScenarioServerTools
