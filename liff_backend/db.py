from datetime import datetime
import logging

import certifi
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from liff_backend.errors import PersistenceError

logger = logging.getLogger(__name__)


class InquiryStore:
    """Append-only store for accepted inquiries in a MongoDB collection."""

    def __init__(self, collection, client=None):
        self.collection = collection
        self.client = client

    @classmethod
    def from_uri(cls, mongo_uri, db_name='gmf_liff', collection_name='inquiries', timeout_ms=5000):
        # MongoDB connection with Atlas/Render-compatible settings
        client = MongoClient(
            mongo_uri,
            tlsCAFile=certifi.where(),
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            socketTimeoutMS=timeout_ms,
            retryWrites=False,
            maxPoolSize=10,
            minPoolSize=0,
        )
        return cls(client[db_name][collection_name], client=client)

    @staticmethod
    def build_document(inquiry, metadata):
        return {
            'company': inquiry.company,
            'contact': inquiry.contact,
            'phone': inquiry.phone,
            'product': inquiry.product,
            'quantity': inquiry.quantity,
            'budget': inquiry.budget,
            # BSON has no date-only type
            'deadline': datetime(inquiry.deadline.year, inquiry.deadline.month, inquiry.deadline.day),
            'notes': inquiry.notes,
            'user_id': inquiry.user_id,
            'date_submitted': metadata.submitted_at,
            'ip_address': metadata.ip_address,
            'user_agent': metadata.user_agent,
        }

    def create(self, inquiry, metadata) -> str:
        try:
            result = self.collection.insert_one(self.build_document(inquiry, metadata))
        except ServerSelectionTimeoutError as e:
            raise PersistenceError(f'MongoDB connection timeout while saving inquiry: {e}') from e
        except PyMongoError as e:
            raise PersistenceError(f'Failed to save inquiry: {e}') from e
        except (BSONError, UnicodeEncodeError) as e:
            raise PersistenceError(f'Inquiry could not be encoded for MongoDB: {e}') from e
        return str(result.inserted_id)

    def ping(self) -> bool:
        if self.client is None:
            return True
        try:
            self.client.admin.command('ping')
        except ServerSelectionTimeoutError as e:
            logger.error(f'MongoDB connection timeout - this may resolve on first request: {e}')
            return False
        except PyMongoError as e:
            logger.error(f'Failed to connect to MongoDB at startup: {e}')
            return False
        logger.info('Successfully connected to MongoDB')
        return True


def init_store(app):
    """Create the process-wide store, or return None when MONGODB_URI is unset."""
    mongo_uri = app.config.get('MONGODB_URI')
    if not mongo_uri:
        app.logger.warning('MONGODB_URI not configured; inquiries will not be persisted')
        return None

    try:
        store = InquiryStore.from_uri(
            mongo_uri,
            db_name=app.config.get('MONGODB_DB', 'gmf_liff'),
            collection_name=app.config.get('MONGODB_COLLECTION', 'inquiries'),
            timeout_ms=app.config.get('MONGODB_TIMEOUT_MS', 5000),
        )
    # InvalidURI, or ConfigurationError when an SRV lookup fails
    except PyMongoError as e:
        app.logger.error(f'Failed to configure MongoDB, persistence disabled: {e}')
        return None
    store.ping()
    return store
