from mentorlink.app import app

__all__ = ["app"]
