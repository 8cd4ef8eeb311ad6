import logging
from matrimony.core import config
from matrimony.core.celery_app import celery_app
from matrimony.models.database import Session
from matrimony.services.auth_service import AuthService

logger = logging.getLogger(__name__)


@celery_app.on_after_configure.connect
def setup_periodic_tasks(sender, **kwargs):
    sender.add_periodic_task(
        config.SESSION_PURGE_INTERVAL,
        purge_expired_sessions.s()
    )


@celery_app.task
def purge_expired_sessions():
    """Drop session tokens that are past their expiry"""
    session = Session()
    try:
        purged = AuthService.purge_expired_tokens(session)
        return {"success": True, "purged_tokens": purged}
    except Exception as e:
        logger.error(f"Error purging expired sessions: {e}")
        return {"success": False, "error": str(e)}
    finally:
        session.close()
