import math
import time
import logging
import argparse

import numpy as np

from Param import Param
from Technology import Technology
from MemCell import MemCell
from gate_calculator import compute_gate_params
from ColumnResistance import MapWeightToConductance
from ProcessingUnit import ProcessingUnit

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description='CIM sub-array / processing unit estimator.')

    # configuration
    parser.add_argument('--config', type=str, default=None, help='two-column key,value CSV overriding Param defaults')
    parser.add_argument('--weight', type=str, default=None, help='CSV weight matrix (algorithm weights)')
    parser.add_argument('--input', type=str, default=None, help='CSV input batch, one column per input vector')

    # architecture
    parser.add_argument('--subarray-row', type=int, default=None, help='sub-arrays in Y direction (default: fit the weight)')
    parser.add_argument('--subarray-col', type=int, default=None, help='sub-arrays in X direction (default: fit the weight)')
    parser.add_argument('--dup-row', type=int, default=1, help='weight duplication in Y direction')
    parser.add_argument('--dup-col', type=int, default=1, help='weight duplication in X direction')

    # random workload
    parser.add_argument('--batch-size', type=int, default=4, help='input vectors generated when --input is not given')
    parser.add_argument('--seed', type=int, default=1, help='random seed (default: 1)')

    # output
    parser.add_argument('--save', action='store_true', help='append the report to SynapticCOREoutput.txt')
    parser.add_argument('--progress', action='store_true', help='show a progress bar per tile')
    parser.add_argument('--log-level', type=str, default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def load_workload(args, param):
    """Weight (as conductance) and input batch, from CSV files or random."""
    rng = np.random.default_rng(args.seed)
    if args.weight:
        weight = np.atleast_2d(np.loadtxt(args.weight, delimiter=','))
    else:
        weight = rng.uniform(param.algoWeightMin, param.algoWeightMax,
                             size=(param.numRowSubArray, param.numColSubArray))
    if args.input:
        inputBatch = np.loadtxt(args.input, delimiter=',')
        if inputBatch.ndim == 1:
            inputBatch = inputBatch[:, None]
    else:
        inputBatch = rng.integers(0, 2, size=(weight.shape[0], args.batch_size)).astype(float)
    return MapWeightToConductance(weight, param), inputBatch


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    param = Param()
    if args.config:
        param.load_csv(args.config)
    tech = Technology().Initialize(param.technode, param.deviceroadmap)
    cell = MemCell(param)
    gate_params = compute_gate_params(param, tech)

    weight, inputBatch = load_workload(args, param)
    numSubArrayRow = args.subarray_row or math.ceil(weight.shape[0] / param.numRowSubArray)
    numSubArrayCol = args.subarray_col or math.ceil(weight.shape[1] / param.numColSubArray)
    logger.info("Mode %s, weight %s, %d input vectors, %dx%d sub-arrays",
                param.mode.name, weight.shape, inputBatch.shape[1], numSubArrayRow, numSubArrayCol)

    start_time = time.time()
    pe = ProcessingUnit(param, tech, cell, gate_params)
    pe.Initialize(numSubArrayRow * args.dup_row, numSubArrayCol * args.dup_col)
    pe.CalculateArea()
    perf = pe.CalculatePerformance(weight, inputBatch, args.dup_row, args.dup_col,
                                   numSubArrayRow * args.dup_row, numSubArrayCol * args.dup_col,
                                   progress=args.progress)

    pe.PrintProperty(perf)
    if args.save:
        pe.SaveOutput(perf)
    logger.info("Finished in %.2fs", time.time() - start_time)
    return perf


if __name__ == "__main__":
    main()
