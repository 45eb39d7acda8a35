"""Firebase service - Realtime Database backed state store"""

import asyncio
import logging
import os
from typing import Any

import firebase_admin
from firebase_admin import credentials, db

from .. import config
from .state_store import StateStore, child_path

logger = logging.getLogger(__name__)


class FirebaseStateStore(StateStore):
    """State store over the Firebase Admin SDK Realtime Database.

    The SDK is blocking, so every call runs in a worker thread and the event
    loop stays free for webhook requests and scheduler ticks.
    """
    
    def __init__(self, credentials_path: str = None, database_url: str = None):
        self.credentials_path = credentials_path or config.FIREBASE_CREDENTIALS_PATH
        self.database_url = database_url or config.FIREBASE_DATABASE_URL
        self.root = None
        self.connected = False
        
        logger.info(f"Firebase state store initialized (database: {self.database_url or '<unset>'})")
    
    async def connect(self):
        """Initialize Firebase connection"""
        try:
            if not firebase_admin._apps:
                cred_path = self.credentials_path
                
                logger.info(f"Loading Firebase credentials from: {cred_path}")
                
                if not os.path.exists(cred_path):
                    if not os.path.isabs(cred_path):
                        abs_path = os.path.expanduser(f"~/{cred_path}")
                        if os.path.exists(abs_path):
                            cred_path = abs_path
                        else:
                            raise FileNotFoundError(f"Firebase credentials not found at {cred_path} or {abs_path}")
                    else:
                        raise FileNotFoundError(f"Firebase credentials not found at {cred_path}")
                
                if not os.access(cred_path, os.R_OK):
                    raise PermissionError(f"No read permission for Firebase credentials at {cred_path}")
                
                if not self.database_url:
                    raise ValueError("FIREBASE_DATABASE_URL is not set")
                
                cred = credentials.Certificate(cred_path)
                firebase_admin.initialize_app(cred, {
                    'databaseURL': self.database_url
                })
            
            self.root = db.reference()
            self.connected = True
            
            logger.info("Connected to Firebase successfully")
            
        except Exception as e:
            logger.error(f"Failed to connect to Firebase: {e}", exc_info=True)
            raise
    
    async def close(self):
        """Disconnect from Firebase"""
        if self.connected:
            self.connected = False
            logger.info("Disconnected from Firebase")
    
    async def get(self, path: str) -> Any:
        ref = self._ref(path)
        return await asyncio.to_thread(ref.get)
    
    async def set(self, path: str, value: Any) -> None:
        ref = self._ref(path)
        await asyncio.to_thread(ref.set, value)
        logger.debug(f"Set {path} = {value}")
    
    def _ref(self, path: str):
        if not self.connected:
            raise RuntimeError("Firebase state store is not connected")
        return self.root.child(child_path(path))
