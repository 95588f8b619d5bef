"""
Permissions helper for the macOS accessibility permission
"""

import platform


class PermissionsHelper:
    """Helper for checking macOS permissions"""

    @staticmethod
    def check_accessibility_permissions() -> bool:
        """Check if the process is trusted to move other apps' windows"""
        from ApplicationServices import AXIsProcessTrusted

        return bool(AXIsProcessTrusted())

    @staticmethod
    def get_missing_permissions() -> list[str]:
        """Get list of missing permissions"""
        missing = []

        if not PermissionsHelper.check_accessibility_permissions():
            missing.append("Accessibility")

        return missing

    @staticmethod
    def is_macos() -> bool:
        """Check if running on macOS"""
        return platform.system() == "Darwin"
