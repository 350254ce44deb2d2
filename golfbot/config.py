import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Bot configuration settings"""
    
    # Discord settings
    DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')
    DISCORD_GUILD_ID = int(os.getenv('DISCORD_GUILD_ID', 0))
    DISCORD_GUILD_IDS = os.getenv('DISCORD_GUILD_IDS', '')  # Comma-separated for multi-guild support
    OWNER_DISCORD_ID = int(os.getenv('OWNER_DISCORD_ID', 0))
    
    # Database settings
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///tournament.db')
    
    # Bot settings
    COMMAND_PREFIX = os.getenv('COMMAND_PREFIX', '!')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    
    # Tournament settings
    DEFAULT_CUT_LINE_SCORE = int(os.getenv('DEFAULT_CUT_LINE_SCORE', 0))
    CUT_LINE_MIN = -100
    CUT_LINE_MAX = 200
    
    @classmethod
    def get_guild_ids(cls):
        """Get list of guild IDs for command syncing"""
        if cls.DISCORD_GUILD_IDS:
            try:
                return [int(guild_id.strip()) for guild_id in cls.DISCORD_GUILD_IDS.split(',') if guild_id.strip()]
            except ValueError:
                raise ValueError("DISCORD_GUILD_IDS must be comma-separated integers")
        elif cls.DISCORD_GUILD_ID:
            return [cls.DISCORD_GUILD_ID]
        else:
            # Global sync
            return []
    
    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if not cls.OWNER_DISCORD_ID:
            raise ValueError("OWNER_DISCORD_ID is required")
        if not cls.CUT_LINE_MIN <= cls.DEFAULT_CUT_LINE_SCORE <= cls.CUT_LINE_MAX:
            raise ValueError(
                f"DEFAULT_CUT_LINE_SCORE must be between {cls.CUT_LINE_MIN} and {cls.CUT_LINE_MAX}"
            )
