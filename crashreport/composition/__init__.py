from crashreport.composition.composer import Composer, build_composer
from crashreport.composition.models import ComposedArtifact

__all__ = ["ComposedArtifact", "Composer", "build_composer"]
