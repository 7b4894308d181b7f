from .data import load_records, write_records
from .files import model_file, scoped_temp_file
from .log import configure_logging
from .plots import plot_search_history, plot_fold_losses
from .seed import derive_seed, make_rng
