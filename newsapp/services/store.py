"""Insert-if-absent on a unique column.

Concurrent writers of the same key are settled by the unique index: the
loser's insert is a no-op and it reads back the winner's row. There is no
application-level locking.
"""

import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from newsapp.extensions import db

logger = logging.getLogger(__name__)

_CONFLICT_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


def insert_if_absent(model, values, key):
    """Insert ``values`` unless a row with the same ``key`` exists.

    Returns ``(row, created)`` where ``row`` is whichever row now owns the
    key. Commits on success.
    """
    lookup = {key: values[key]}
    insert = _CONFLICT_INSERTS.get(db.engine.dialect.name)

    if insert is not None:
        stmt = (
            insert(model.__table__)
            .values(**values)
            .on_conflict_do_nothing(index_elements=[key])
        )
        result = db.session.execute(stmt)
        db.session.commit()
        created = result.rowcount == 1
    else:
        try:
            db.session.add(model(**values))
            db.session.commit()
            created = True
        except IntegrityError:
            db.session.rollback()
            logger.debug('Lost insert race on %s.%s=%r', model.__tablename__, key, values[key])
            created = False

    row = model.query.filter_by(**lookup).one()
    return row, created
