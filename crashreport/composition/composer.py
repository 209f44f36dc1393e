from crashreport.composition.image import ImageRenderer
from crashreport.composition.models import ComposedArtifact
from crashreport.composition.text import TextComposer
from crashreport.config.settings import Settings
from crashreport.logging.logger import Log
from crashreport.reporting.models import AggregateStats


class Composer:
    """Produces the message and the image for one set of statistics."""

    def __init__(self, text_composer: TextComposer, image_renderer: ImageRenderer) -> None:
        self._text_composer = text_composer
        self._image_renderer = image_renderer

    def compose(self, stats: AggregateStats, window_display: str) -> ComposedArtifact:
        text = self._text_composer.compose(stats, window_display)
        image = self._image_renderer.render(stats, window_display)
        Log.info(f"Composed {len(text)}-char message and {len(image)}-byte image")
        return ComposedArtifact(text=text, image=image, image_format=ImageRenderer.FORMAT)


def build_composer(settings: Settings) -> Composer:
    """Build a Composer from the text and image settings."""
    return Composer(
        text_composer=TextComposer(
            city=settings.municipality_display_name,
            max_length=settings.text_max_length,
        ),
        image_renderer=ImageRenderer(
            template_path=settings.image_template_path,
            font_path=settings.image_font_path,
            font_size=settings.image_font_size,
            text_color=settings.image_text_color,
            stroke_width=settings.image_stroke_width,
        ),
    )
