from .vtt_exporter import export_karaoke_vtt

__all__ = ["export_karaoke_vtt"]
