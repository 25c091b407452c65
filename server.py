"""
HTTP server for the Article Briefing application.

A single-module Django app exposing the pipeline at GET /process-article
and serving the generated audio files.
"""

import functools
import logging
import os

from django.conf import settings

if not settings.configured:
    settings.configure(
        DEBUG=False,
        SECRET_KEY=os.getenv("DJANGO_SECRET_KEY", "article-briefing"),
        ROOT_URLCONF=__name__,
        ALLOWED_HOSTS=["*"],
        INSTALLED_APPS=[],
        MIDDLEWARE=["django.middleware.common.CommonMiddleware"],
        APPEND_SLASH=False,
    )

import django

django.setup()

from django.core.wsgi import get_wsgi_application
from django.http import FileResponse, Http404, JsonResponse
from django.urls import re_path
from django.views.decorators.http import require_GET

from config import PipelineConfig
from errors import PipelineError
from pipeline import ArticlePipeline, build_pipeline


@functools.lru_cache(maxsize=1)
def get_config() -> PipelineConfig:
    config = PipelineConfig.from_env()
    missing = config.missing_secrets()
    if missing:
        logging.warning(f"Missing secrets: {', '.join(missing)}. Provider calls will fail to authenticate.")
    return config


@functools.lru_cache(maxsize=1)
def get_pipeline() -> ArticlePipeline:
    return build_pipeline(get_config())


@require_GET
def process_article(request):
    try:
        result = get_pipeline().run()
    except PipelineError as e:
        logging.error(f"Pipeline failed: {e.message}")
        return JsonResponse({"error": e.message}, status=500)
    return JsonResponse(result.model_dump(by_alias=True))


@require_GET
def audio_file(request, filename):
    path = os.path.join(get_config().audio_output_dir, filename)
    if not os.path.isfile(path):
        raise Http404("Audio file not found")
    return FileResponse(open(path, "rb"), content_type="audio/mpeg")


urlpatterns = [
    re_path(r"^process-article$", process_article, name="process-article"),
    re_path(r"^audio/(?P<filename>[\w-]+\.mp3)$", audio_file, name="audio-file"),
]

application = get_wsgi_application()
