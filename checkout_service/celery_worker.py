# checkout_service/celery_worker.py
from celery import Celery

from checkout_service.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "checkout",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# tasks have to be imported explicitly for the worker to register them
celery_app.conf.imports = (
    "checkout_service.services.notification_service",
)

celery_app.conf.timezone = "UTC"
