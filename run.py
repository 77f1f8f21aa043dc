"""Entry point per l'applicazione.

Questo script avvia l'app Flask e può inizializzare il database se
la variabile d'ambiente `INIT_DB` è impostata (es. INIT_DB=1).
"""

import os
from financeio import create_app, db


def init_database():
    """Crea le tabelle (solo quando INIT_DB=1, per database non SQLite)."""
    import financeio.models  # noqa: F401 - registra i modelli
    db.create_all()


def main():
    app = create_app()

    if os.environ.get('INIT_DB') == '1':
        with app.app_context():
            init_database()

    app.run(host=app.config.get('HOST', '0.0.0.0'), port=app.config.get('PORT', 3000),
            debug=app.config.get('DEBUG', False))


if __name__ == '__main__':
    main()
